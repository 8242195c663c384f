"""
Persona Scoring

Maps quiz answers onto one persona via a weighted scoring matrix.

Each question has a fixed set of options; each option awards points to
every persona (one row of six integers, in PersonaTag declaration order).
Points are summed over the answered questions and the highest score wins,
with ties going to the persona declared first.

Classification never fails: negative answers count as unanswered, answers
past the last option are clamped to the last option, and answers for
questions beyond the quiz length are ignored.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .taxonomy import PersonaTag, PERSONA_ORDER, legacy_style_for

logger = logging.getLogger(__name__)

UNANSWERED = -1


@dataclass(frozen=True)
class QuizQuestion:
    """A quiz question and its authored options."""
    question_id: str
    text: str
    options: Tuple[str, ...]


@dataclass(frozen=True)
class ScoringMatrix:
    """
    Immutable (question, option) -> per-persona points table.

    rows[q][o] is a tuple of len(PERSONA_ORDER) non-negative integers.
    """
    rows: Tuple[Tuple[Tuple[int, ...], ...], ...]

    def __post_init__(self):
        width = len(PERSONA_ORDER)
        for q, options in enumerate(self.rows):
            if not options:
                raise ValueError(f"Question {q} has no scored options")
            for o, row in enumerate(options):
                if len(row) != width:
                    raise ValueError(
                        f"Question {q} option {o} scores {len(row)} personas, expected {width}"
                    )
                if any(points < 0 for points in row):
                    raise ValueError(f"Question {q} option {o} has negative points")

    @classmethod
    def from_lists(cls, rows: Sequence[Sequence[Sequence[int]]]) -> "ScoringMatrix":
        return cls(rows=tuple(tuple(tuple(row) for row in options) for options in rows))

    @property
    def question_count(self) -> int:
        return len(self.rows)

    def option_count(self, question: int) -> int:
        return len(self.rows[question])

    def points(self, question: int, option: int) -> Tuple[int, ...]:
        return self.rows[question][option]


# Persona order: morning-minimalist(0), upgrader(1), craft-barista(2),
# traveller(3), non-barista(4), office-manager(5)
DEFAULT_SCORING_MATRIX = ScoringMatrix.from_lists([
    # Q1: "When do you usually have your first coffee?"
    [
        [2, 0, 0, 0, 1, 0],  # Before 7am
        [1, 1, 0, 0, 0, 0],  # 7-9am
        [0, 0, 1, 1, 0, 0],  # After 9am
        [0, 0, 0, 0, 2, 0],  # I lose track
    ],
    # Q2: "How do you feel about the brewing process?"
    [
        [1, 0, 0, 0, 2, 0],  # I want it fast
        [2, 1, 0, 0, 0, 0],  # I enjoy the ritual
        [0, 1, 2, 0, 0, 0],  # I want to master it
        [0, 0, 0, 0, 2, 1],  # I just want it to work
    ],
    # Q3: "Where do you mostly brew?"
    [
        [1, 1, 0, 0, 0, 0],  # Home kitchen
        [1, 0, 0, 0, 1, 0],  # Home office
        [0, 0, 0, 3, 0, 0],  # Travelling
        [0, 0, 0, 0, 0, 3],  # At the office
    ],
    # Q4: "What's your current setup?"
    [
        [1, 0, 0, 0, 1, 0],  # No machine yet
        [0, 1, 0, 0, 2, 0],  # A capsule/pod machine
        [0, 2, 1, 0, 0, 0],  # A basic espresso machine
        [0, 0, 3, 0, 0, 0],  # A proper espresso setup
    ],
])

DEFAULT_QUESTIONS = (
    QuizQuestion(
        question_id="first_coffee",
        text="When do you usually have your first coffee?",
        options=("Before 7am", "7–9am", "After 9am", "I lose track"),
    ),
    QuizQuestion(
        question_id="brewing_process",
        text="How do you feel about the brewing process?",
        options=("I want it fast", "I enjoy the ritual", "I want to master it", "I just want it to work"),
    ),
    QuizQuestion(
        question_id="brew_location",
        text="Where do you mostly brew?",
        options=("Home kitchen", "Home office", "Travelling", "At the office"),
    ),
    QuizQuestion(
        question_id="current_setup",
        text="What's your current setup?",
        options=(
            "No machine yet",
            "A capsule/pod machine",
            "A basic espresso machine",
            "A proper espresso setup",
        ),
    ),
)


@dataclass(frozen=True)
class PersonaClassification:
    """Result of scoring one complete answer set."""
    persona: PersonaTag
    scores: Tuple[int, ...]  # One entry per persona, declaration order
    answers: Tuple[int, ...]  # Effective answers (clamped, -1 for unanswered)

    @property
    def score_map(self) -> Dict[str, int]:
        return {tag.value: score for tag, score in zip(PERSONA_ORDER, self.scores)}

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'persona': self.persona.value,
            'legacy_style': legacy_style_for(self.persona).value,
            'scores': self.score_map,
            'answers': list(self.answers),
        }


def lowest_index_wins_ties(scores: Sequence[int]) -> int:
    """
    Index of the winning persona.

    The running maximum starts at 0 and the winner at index 0, and the
    winner only changes on a strictly greater score. Ties therefore go to
    the lower index and an all-zero vector selects index 0.
    """
    max_score = 0
    winner = 0
    for index, score in enumerate(scores):
        if score > max_score:
            max_score = score
            winner = index
    return winner


class PersonaClassifier:
    """Scores answer vectors against an immutable scoring matrix."""

    def __init__(self, matrix: ScoringMatrix = DEFAULT_SCORING_MATRIX,
                 questions: Optional[Sequence[QuizQuestion]] = None):
        self.matrix = matrix
        if questions is None and matrix is DEFAULT_SCORING_MATRIX:
            questions = DEFAULT_QUESTIONS
        self.questions = tuple(questions or ())

    def effective_answers(self, answers: Sequence[int]) -> List[int]:
        """Answers truncated to the quiz length, clamped, negatives as UNANSWERED."""
        effective = []
        for question, answer in enumerate(answers[:self.matrix.question_count]):
            if answer < 0:
                effective.append(UNANSWERED)
            else:
                effective.append(min(answer, self.matrix.option_count(question) - 1))
        return effective

    def score(self, answers: Sequence[int]) -> PersonaClassification:
        """
        Score an answer vector.

        Args:
            answers: Zero-based option indices, one per question (-1 = unanswered)

        Returns:
            PersonaClassification with the winner and the full score vector
        """
        scores = [0] * len(PERSONA_ORDER)
        effective = self.effective_answers(answers)

        for question, option in enumerate(effective):
            if option == UNANSWERED:
                continue
            for persona_index, points in enumerate(self.matrix.points(question, option)):
                scores[persona_index] += points

        persona = PERSONA_ORDER[lowest_index_wins_ties(scores)]
        logger.debug("Classified answers=%s scores=%s persona=%s", effective, scores, persona.value)

        return PersonaClassification(
            persona=persona,
            scores=tuple(scores),
            answers=tuple(effective),
        )

    def classify(self, answers: Sequence[int]) -> PersonaTag:
        """Winning persona for an answer vector."""
        return self.score(answers).persona


default_classifier = PersonaClassifier()


def classify(answers: Sequence[int]) -> PersonaTag:
    """Classify with the default Arco quiz."""
    return default_classifier.classify(answers)
