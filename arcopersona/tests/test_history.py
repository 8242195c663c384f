"""
Tests for Quiz Result History
"""

from datetime import datetime, timedelta

import pytest
from arcopersona.personas.history import save_quiz_result, get_quiz_results, get_persona_distribution
from arcopersona.personas.scoring import PersonaClassifier


@pytest.fixture
def classifier():
    return PersonaClassifier()


class TestSaveQuizResult:
    """Tests for saving classifications."""

    def test_saves_classification(self, session, classifier):
        result = save_quiz_result(classifier.score([99, 3, 3, 3]), visitor_id="visitor-1", session=session)

        assert result.id is not None
        assert result.persona == 'non-barista'
        assert result.legacy_style == 'the-non-barista'
        assert result.answers == [3, 3, 3, 3]
        assert result.scores == [0, 0, 3, 0, 4, 4]

    def test_anonymous_visitor(self, session, classifier):
        result = save_quiz_result(classifier.score([]), session=session)

        assert result.visitor_id is None
        assert result.persona == 'morning-minimalist'


class TestGetQuizResults:
    """Tests for retrieving history."""

    def test_newest_first(self, session, classifier):
        now = datetime(2026, 3, 1, 8, 0)
        save_quiz_result(classifier.score([0, 0, 0, 0]), "visitor-1", session, assigned_at=now)
        save_quiz_result(classifier.score([2, 0, 2, 1]), "visitor-1", session, assigned_at=now + timedelta(days=1))

        results = get_quiz_results("visitor-1", session=session)

        assert [r.persona for r in results] == ['traveller', 'morning-minimalist']

    def test_filter_and_limit(self, session, classifier):
        save_quiz_result(classifier.score([0, 0, 0, 0]), "visitor-1", session)
        save_quiz_result(classifier.score([0, 0, 0, 0]), "visitor-1", session)
        save_quiz_result(classifier.score([3, 3, 3, 3]), "visitor-2", session)

        assert len(get_quiz_results("visitor-1", session=session)) == 2
        assert len(get_quiz_results(session=session, limit=1)) == 1
        assert len(get_quiz_results(session=session)) == 3


class TestPersonaDistribution:
    """Tests for persona counts."""

    def test_all_personas_present(self, session):
        distribution = get_persona_distribution(session=session)

        assert len(distribution) == 6
        assert set(distribution.values()) == {0}

    def test_counts(self, session, classifier):
        save_quiz_result(classifier.score([0, 0, 0, 0]), session=session)
        save_quiz_result(classifier.score([0, 0, 0, 0]), session=session)
        save_quiz_result(classifier.score([1, 3, 3, 2]), session=session)

        distribution = get_persona_distribution(session=session)

        assert distribution['morning-minimalist'] == 2
        assert distribution['office-manager'] == 1
        assert distribution['traveller'] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
