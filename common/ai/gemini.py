"""
Google Gemini AI provider implementation.

Provides text and JSON generation using the google-generativeai SDK.

Example:
    from common.ai import GeminiProvider

    gemini = GeminiProvider(api_key="your-api-key")
    text = await gemini.generate_text("Summarize recursion in one line")

    decision = await gemini.generate_json(prompt, schema=FilterDecision)
"""

from typing import Any, Optional, Type

from common.ai.base import AIProvider, T, parse_json_reply, schema_instructions


class GeminiProvider(AIProvider):
    """
    Google Gemini AI provider.

    JSON calls request the application/json mime type and validate the
    reply with Pydantic.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash-lite",
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Google AI Studio API key
            model: Model to use (default: gemini-2.5-flash-lite)
        """
        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai package is required for Gemini. "
                "Install with: pip install google-generativeai"
            )

        genai.configure(api_key=api_key)
        self._genai = genai
        self.model = model

    def _model(self, system_prompt: Optional[str], **kwargs: Any):
        return self._genai.GenerativeModel(
            kwargs.get("model", self.model),
            system_instruction=system_prompt,
        )

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> str:
        """Send prompt and get text response from Gemini."""
        response = await self._model(system_prompt, **kwargs).generate_content_async(
            prompt,
            generation_config=self._genai.GenerationConfig(
                max_output_tokens=max_tokens,
                temperature=temperature,
            ),
        )
        return response.text

    async def generate_json(
        self,
        prompt: str,
        schema: Type[T],
        system_prompt: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.3,
        **kwargs: Any,
    ) -> T:
        """Send prompt and get a schema-validated JSON response from Gemini."""
        response = await self._model(system_prompt, **kwargs).generate_content_async(
            prompt + schema_instructions(schema),
            generation_config=self._genai.GenerationConfig(
                max_output_tokens=max_tokens,
                temperature=temperature,
                response_mime_type="application/json",
            ),
        )
        return parse_json_reply(response.text, schema)
