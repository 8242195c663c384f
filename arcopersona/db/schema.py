"""
Database schema definitions for Arco persona storage.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class StoredPersonaRecord(Base):
    """Server-side persona record - one row per (visitor, record key)."""
    __tablename__ = 'persona_records'

    visitor_id = Column(String, primary_key=True)
    key = Column(String, primary_key=True)  # arco_persona or arco-brew-style
    value = Column(String, nullable=False)  # Percent-encoded tag
    written_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False)


class QuizResult(Base):
    """Quiz result table - one row per completed quiz."""
    __tablename__ = 'quiz_results'

    id = Column(Integer, primary_key=True, autoincrement=True)
    visitor_id = Column(String, nullable=True, index=True)  # Anonymous visitors have none
    persona = Column(String, nullable=False, index=True)
    legacy_style = Column(String, nullable=False)
    answers = Column(JSON, nullable=False)  # Effective (clamped) answers
    scores = Column(JSON, nullable=False)  # Score vector in persona order
    assigned_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
