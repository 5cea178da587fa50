"""
Learning insights from onboarding answers.
"""

import logging
from typing import List

from common.ai import AIProvider
from blimari.schemas.ai import Insights
from blimari.services.ai.context import format_answers

logger = logging.getLogger(__name__)

FALLBACK_INSIGHT = (
    "Não foi possível gerar insights personalizados. "
    "Por favor, selecione as fontes manualmente."
)

KNOWN_SOURCES = ("youtube", "github", "web", "books")


class InsightService:
    """Summarizes a learner's answers and recommends content sources."""

    def __init__(self, ai_provider: AIProvider):
        self._ai = ai_provider

    async def generate_insights(
        self,
        answers: List[str],
        topic: str,
        language: str = "pt-BR",
    ) -> Insights:
        """
        Generate a short insight and recommended sources.

        Never raises: any provider or validation failure yields the
        fallback insight with no recommended sources.
        """
        prompt = f"""A learner answered onboarding questions about learning "{topic}":
{format_answers(answers)}

Write one short, encouraging insight (at most 40 words, in {language}) describing
their level, preferred learning style and main goal.

Then recommend which content sources suit them best, choosing only from:
{", ".join(KNOWN_SOURCES)}.

Return an object with "insightText" and "recommendedSources".
"""

        try:
            insights = await self._ai.generate_json(prompt, Insights, temperature=0.5)
        except Exception as e:
            logger.warning(f"Insight generation failed for '{topic}', using fallback: {e}")
            return Insights(insightText=FALLBACK_INSIGHT, recommendedSources=[])

        sources = []
        for source in insights.recommendedSources:
            source = source.strip().lower()
            if source in KNOWN_SOURCES and source not in sources:
                sources.append(source)

        return Insights(insightText=insights.insightText, recommendedSources=sources)
