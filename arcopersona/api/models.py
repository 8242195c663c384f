"""
Pydantic Models for API Request/Response
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


# Request Models

class QuizSubmission(BaseModel):
    """Request model for a completed quiz."""
    answers: List[int] = Field(..., description="Zero-based option index per question (-1 = unanswered)")
    visitor_id: Optional[str] = Field(None, description="Visitor identifier for quiz history")


class PageComposeRequest(BaseModel):
    """Request model for page assembly."""
    persona: Optional[str] = Field(None, description="Explicit persona tag (defaults to the persona cookie)")
    content: Dict[str, Any] = Field(default_factory=dict, description="Base page content")


# Response Models

class QuizQuestionResponse(BaseModel):
    """One quiz question."""
    question_id: str
    text: str
    options: List[str]


class QuizResponse(BaseModel):
    """Response model for the quiz definition."""
    questions: List[QuizQuestionResponse]
    count: int


class QuizResultResponse(BaseModel):
    """Response model for a scored quiz."""
    persona: str
    persona_name: str
    legacy_style: str
    scores: Dict[str, int]
    answers: List[int]
    redirect_url: str


class PersonaResponse(BaseModel):
    """Response model for the visitor's current persona."""
    persona: Optional[str] = None
    legacy_style: Optional[str] = None
    label: Optional[str] = None
    tagline: Optional[str] = None
    result_url: Optional[str] = None
    show_banner: bool


class VariantResponse(BaseModel):
    """Response model for a variant lookup."""
    table: str
    persona: Optional[str]
    entry: Any


class QuizResultItem(BaseModel):
    """Stored quiz result."""
    id: int
    visitor_id: Optional[str]
    persona: str
    legacy_style: str
    answers: List[int]
    scores: List[int]
    assigned_at: datetime

    class Config:
        from_attributes = True


class PersonaDistributionResponse(BaseModel):
    """Response model for persona counts."""
    distribution: Dict[str, int]
    total: int


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    detail: Optional[str] = None
