"""
Database Module

SQLAlchemy schema and session helpers for server-side persona records
and quiz-result history.
"""

from .database import get_engine, get_session, init_database
from .schema import Base, StoredPersonaRecord, QuizResult

__all__ = [
    'get_engine',
    'get_session',
    'init_database',
    'Base',
    'StoredPersonaRecord',
    'QuizResult',
]
