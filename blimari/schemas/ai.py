"""
Pydantic models for onboarding questions and insights.

These are the output schemas handed to the AI provider; a reply that
does not validate is treated as a failed call.
"""

from typing import List, Literal

from pydantic import BaseModel, Field


class QuestionOption(BaseModel):
    """One selectable answer."""
    id: str
    text: str
    description: str = ""
    weight: int = Field(ge=1, le=5)


class Question(BaseModel):
    """One onboarding question."""
    id: int
    question: str
    description: str = ""
    category: Literal["experience", "learning_style", "goal"]
    options: List[QuestionOption]


class QuestionSet(BaseModel):
    """Output of the question generation AI call."""
    topic: str
    questions: List[Question]


class Insights(BaseModel):
    """Output of the insights AI call."""
    insightText: str
    recommendedSources: List[str] = Field(default_factory=list)


# =============================================================================
# Request Schemas
# =============================================================================

class QuestionsRequest(BaseModel):
    """Request body for POST /ai/questions."""
    topic: str = ""
    language: str = "pt-BR"


class InsightsRequest(BaseModel):
    """Request body for POST /ai/insights."""
    answers: List[str] = Field(default_factory=list)
    topic: str = ""
    language: str = "pt-BR"
