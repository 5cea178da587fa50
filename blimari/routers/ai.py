"""
FastAPI router for AI onboarding endpoints.

Provides question generation and learning insights.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from blimari.dependencies import get_insight_service, get_question_service
from blimari.schemas.ai import InsightsRequest, QuestionsRequest
from blimari.services.ai import InsightService, QuestionService
from common.utils import success_response
from common.utils.exceptions import BadRequestException, InternalServerException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/questions")
async def generate_questions(
    body: QuestionsRequest,
    question_service: Annotated[QuestionService, Depends(get_question_service)],
):
    """Generate three personalized onboarding questions for a topic."""
    topic = body.topic.strip()
    if not topic:
        raise BadRequestException(message="Tópico é obrigatório", code="TOPIC_REQUIRED")

    try:
        questions = await question_service.generate_questions(topic, body.language)
    except Exception as e:
        logger.error(f"Question generation failed for '{topic}': {e}")
        raise InternalServerException(
            message="Falha ao gerar perguntas personalizadas",
            code="QUESTION_GENERATION_FAILED",
        )

    return success_response(questions.model_dump())


@router.post("/insights")
async def generate_insights(
    body: InsightsRequest,
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
):
    """Summarize onboarding answers and recommend content sources."""
    if not body.answers or not body.topic.strip():
        raise BadRequestException(message="Missing answers or topic", code="MISSING_PARAMETERS")

    insights = await insight_service.generate_insights(body.answers, body.topic.strip(), body.language)
    return success_response(insights=insights.model_dump())
