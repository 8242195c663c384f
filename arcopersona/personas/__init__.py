"""
Persona Module

Quiz-driven persona classification and persona persistence.

Modules:
    - taxonomy: Canonical persona tags, legacy slugs and display data
    - scoring: Scoring matrix and the persona classifier
    - store: Persisted persona records over pluggable storage backends
    - history: Completed quiz results for reporting
"""

from .taxonomy import (
    PersonaTag,
    LegacyStyle,
    DEFAULT_PERSONA,
    PERSONA_ORDER,
    coerce_persona,
    legacy_style_for,
    result_page,
    persona_label,
    persona_tagline,
)
from .scoring import (
    PersonaClassifier,
    PersonaClassification,
    QuizQuestion,
    ScoringMatrix,
    DEFAULT_SCORING_MATRIX,
    classify,
    lowest_index_wins_ties,
)
from .store import (
    PersonaStore,
    PersonaRecord,
    MemoryStorage,
    CookieStorage,
    DatabaseStorage,
    StorageUnavailableError,
)
from .history import save_quiz_result, get_quiz_results, get_persona_distribution

__all__ = [
    'PersonaTag',
    'LegacyStyle',
    'DEFAULT_PERSONA',
    'PERSONA_ORDER',
    'coerce_persona',
    'legacy_style_for',
    'result_page',
    'persona_label',
    'persona_tagline',
    'PersonaClassifier',
    'PersonaClassification',
    'QuizQuestion',
    'ScoringMatrix',
    'DEFAULT_SCORING_MATRIX',
    'classify',
    'lowest_index_wins_ties',
    'PersonaStore',
    'PersonaRecord',
    'MemoryStorage',
    'CookieStorage',
    'DatabaseStorage',
    'StorageUnavailableError',
    'save_quiz_result',
    'get_quiz_results',
    'get_persona_distribution',
]
