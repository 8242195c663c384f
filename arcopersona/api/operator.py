"""
Operator API Endpoints

Reporting over completed quizzes.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from arcopersona.personas.history import get_quiz_results, get_persona_distribution
from arcopersona.api.models import QuizResultItem, PersonaDistributionResponse
from arcopersona.api.public import get_db_session


router = APIRouter(prefix="/api/operator", tags=["operator"])


@router.get("/quiz-results", response_model=List[QuizResultItem])
def list_quiz_results(
    visitor_id: Optional[str] = None,
    limit: Optional[int] = 50,
    session: Session = Depends(get_db_session)
) -> List[QuizResultItem]:
    """Most recent quiz results, optionally for one visitor."""
    results = get_quiz_results(visitor_id=visitor_id, session=session, limit=limit)
    return [QuizResultItem.model_validate(result) for result in results]


@router.get("/personas/distribution", response_model=PersonaDistributionResponse)
def persona_distribution(session: Session = Depends(get_db_session)) -> PersonaDistributionResponse:
    """Quiz results per persona."""
    distribution = get_persona_distribution(session=session)
    return PersonaDistributionResponse(
        distribution=distribution,
        total=sum(distribution.values())
    )
