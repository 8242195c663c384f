"""
Public API Endpoints

Visitor-facing endpoints: the quiz, the current persona, variant lookups
and page assembly.
"""

import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from arcopersona.db.database import get_session
from arcopersona.personas.scoring import default_classifier
from arcopersona.personas.store import PersonaStore, CookieStorage, DatabaseStorage
from arcopersona.personas.history import save_quiz_result
from arcopersona.personas.taxonomy import (
    coerce_persona,
    legacy_style_for,
    persona_label,
    persona_tagline,
    result_page,
)
from arcopersona.content.assembly import ContentAssembler
from arcopersona.content.variants import default_registry
from arcopersona.api.models import (
    QuizSubmission, QuizResponse, QuizQuestionResponse, QuizResultResponse,
    PersonaResponse, VariantResponse, PageComposeRequest
)
from arcopersona.api.exceptions import VariantTableNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["public"])


def get_db_session() -> Session:
    """Dependency to get database session."""
    session = get_session()
    try:
        yield session
    finally:
        session.close()


def get_persona_store(request: Request, response: Response) -> PersonaStore:
    """Dependency to get a cookie-backed persona store for this request."""
    return PersonaStore(CookieStorage(request, response))


@router.get("/quiz", response_model=QuizResponse)
def get_quiz() -> QuizResponse:
    """Quiz questions and options, in scoring order."""
    questions = [
        QuizQuestionResponse(
            question_id=question.question_id,
            text=question.text,
            options=list(question.options)
        )
        for question in default_classifier.questions
    ]
    return QuizResponse(questions=questions, count=len(questions))


@router.post("/quiz", response_model=QuizResultResponse)
def submit_quiz(
    submission: QuizSubmission,
    request: Request,
    response: Response,
    redirect: bool = False,
    session: Session = Depends(get_db_session)
):
    """
    Score a completed quiz and persist the persona.

    Both persona cookies are set on the response; when a visitor_id is
    given the same two records are also stored server-side. With
    ?redirect=true the visitor is sent straight to their experience page.

    Args:
        submission: Answers for the whole quiz
        redirect: Respond with a 303 redirect instead of JSON
        session: Database session
    """
    classification = default_classifier.score(submission.answers)
    persona = classification.persona
    redirect_url = result_page(persona)

    target = RedirectResponse(url=redirect_url, status_code=303) if redirect else response
    PersonaStore(CookieStorage(request, target)).persist(persona)
    if submission.visitor_id:
        PersonaStore(DatabaseStorage(session, submission.visitor_id)).persist(persona)

    try:
        save_quiz_result(classification, visitor_id=submission.visitor_id, session=session)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Could not record quiz result for persona %s", persona.value)

    if redirect:
        return target

    return QuizResultResponse(
        persona=persona.value,
        persona_name=persona_label(persona),
        legacy_style=legacy_style_for(persona).value,
        scores=classification.score_map,
        answers=list(classification.answers),
        redirect_url=redirect_url
    )


@router.get("/persona", response_model=PersonaResponse)
def get_persona(store: PersonaStore = Depends(get_persona_store)) -> PersonaResponse:
    """Current persona from the persona cookie, with banner copy."""
    persona = store.read()
    legacy = store.read_legacy()

    if persona is None:
        return PersonaResponse(
            legacy_style=legacy.value if legacy else None,
            show_banner=False
        )

    return PersonaResponse(
        persona=persona.value,
        legacy_style=legacy.value if legacy else None,
        label=persona_label(persona),
        tagline=persona_tagline(persona),
        result_url=result_page(persona),
        show_banner=True
    )


@router.delete("/persona", status_code=204)
def clear_persona(store: PersonaStore = Depends(get_persona_store)):
    """Forget the visitor's persona (retake the quiz)."""
    store.clear()


@router.get("/variants/{table}", response_model=VariantResponse)
def get_variant(
    table: str,
    persona: Optional[str] = None,
    limit: Optional[int] = None
) -> VariantResponse:
    """
    Look up one variant table.

    Raises:
        VariantTableNotFoundError: If table is not a variant table
    """
    registry = default_registry()
    try:
        entry = registry.get(table, persona, limit)
    except KeyError:
        raise VariantTableNotFoundError(table)

    resolved = coerce_persona(persona)
    return VariantResponse(
        table=table,
        persona=resolved.value if resolved else None,
        entry=entry
    )


@router.post("/pages/{page_type}")
def compose_page(
    page_type: str,
    compose_request: PageComposeRequest,
    store: PersonaStore = Depends(get_persona_store)
) -> Dict[str, Any]:
    """
    Assemble page data for the rendering layer.

    The persona comes from the request body when given, otherwise from the
    persona cookie.
    """
    assembler = ContentAssembler(store=store)
    return assembler.compose(page_type, compose_request.persona, compose_request.content)
