"""
Quiz Result History

Functions to save and retrieve completed quiz classifications.
"""

from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from arcopersona.db.schema import QuizResult
from arcopersona.db.database import get_session
from .scoring import PersonaClassification
from .taxonomy import PERSONA_ORDER, legacy_style_for


def save_quiz_result(
    classification: PersonaClassification,
    visitor_id: Optional[str] = None,
    session: Session = None,
    assigned_at: Optional[datetime] = None
) -> QuizResult:
    """
    Save a completed quiz classification to the quiz_results table.

    Args:
        classification: Result of scoring a complete answer set
        visitor_id: Visitor identifier, if the visitor has one
        session: Database session (optional)
        assigned_at: Override for the assignment time (defaults to now)

    Returns:
        QuizResult record that was created
    """
    close_session = False
    if session is None:
        session = get_session()
        close_session = True

    try:
        result = QuizResult(
            visitor_id=visitor_id,
            persona=classification.persona.value,
            legacy_style=legacy_style_for(classification.persona).value,
            answers=list(classification.answers),
            scores=list(classification.scores),
            assigned_at=assigned_at or datetime.utcnow()
        )

        session.add(result)
        session.commit()
        session.refresh(result)

        return result

    finally:
        if close_session:
            session.close()


def get_quiz_results(
    visitor_id: Optional[str] = None,
    session: Session = None,
    limit: Optional[int] = None
) -> List[QuizResult]:
    """
    Retrieve quiz results, newest first.

    Args:
        visitor_id: Restrict to one visitor, None for all
        session: Database session (optional)
        limit: Maximum number of records to return (None for all)
    """
    close_session = False
    if session is None:
        session = get_session()
        close_session = True

    try:
        query = session.query(QuizResult)

        if visitor_id is not None:
            query = query.filter(QuizResult.visitor_id == visitor_id)

        query = query.order_by(desc(QuizResult.assigned_at), desc(QuizResult.id))

        if limit is not None:
            query = query.limit(limit)

        return query.all()

    finally:
        if close_session:
            session.close()


def get_persona_distribution(session: Session = None) -> Dict[str, int]:
    """Number of quiz results per persona; every persona is present."""
    close_session = False
    if session is None:
        session = get_session()
        close_session = True

    try:
        counts = dict(
            session.query(QuizResult.persona, func.count(QuizResult.id))
            .group_by(QuizResult.persona)
            .all()
        )
        return {tag.value: counts.get(tag.value, 0) for tag in PERSONA_ORDER}

    finally:
        if close_session:
            session.close()
