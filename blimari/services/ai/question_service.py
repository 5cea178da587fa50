"""
Onboarding question generation.

Asks the AI provider for exactly three questions (experience, learning
style, goal) tailored to the topic.
"""

import logging

from common.ai import AIProvider
from blimari.schemas.ai import QuestionSet

logger = logging.getLogger(__name__)


class QuestionService:
    """Generates personalized onboarding questions."""

    def __init__(self, ai_provider: AIProvider):
        """
        Initialize QuestionService.

        Args:
            ai_provider: Provider used for structured generation
        """
        self._ai = ai_provider

    async def generate_questions(self, topic: str, language: str = "pt-BR") -> QuestionSet:
        """
        Generate three onboarding questions for a topic.

        Args:
            topic: What the user wants to learn
            language: Language for questions and options

        Returns:
            Validated QuestionSet

        Raises:
            AIResponseError: If the reply does not validate
            Exception: Any provider/network error (there is no fallback)
        """
        prompt = f"""You are an expert in education and learning personalization. A user wants to learn about "{topic}".
The user's language is {language}.

Create EXACTLY 3 strategic questions to personalize the learning path about "{topic}".

1. EXPERIENCE (category "experience"): current level of knowledge. Options with ids
   "beginner", "intermediate" and "advanced", weights 1, 3 and 5.
2. LEARNING STYLE (category "learning_style"): visual/practical, theoretical/conceptual,
   hands-on/projects. Weight is the intensity of the style (1-5).
3. GOAL (category "goal"): career/professional, personal interest, academic/certification.
   Weight is the urgency of the goal (1-5).

Rules:
- Be specific to "{topic}", never generic
- Questions, options and descriptions must be written in {language}
- Use ids 1, 2 and 3 for the questions
- Set "topic" to "{topic}"
"""

        result = await self._ai.generate_json(prompt, QuestionSet, temperature=0.7)
        logger.info(f"Generated {len(result.questions)} questions for '{topic}'")
        return result
