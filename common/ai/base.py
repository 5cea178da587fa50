"""
Abstract AI provider interface.

Defines the contract that all AI/LLM providers must implement.
This allows swapping between different AI services (Gemini, Claude)
without changing application code.

Example:
    from common.ai import AIProvider, GeminiProvider, ClaudeProvider

    def get_ai_provider(settings) -> AIProvider:
        if settings.AI_PROVIDER == "claude":
            return ClaudeProvider(api_key=settings.CLAUDE_API_KEY)
        return GeminiProvider(api_key=settings.GEMINI_API_KEY)
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class AIResponseError(Exception):
    """Raised when a provider reply is empty or does not match the expected shape."""


class AIProvider(ABC):
    """
    Abstract AI provider interface.

    Implement this for different LLM services. Structured output goes
    through generate_json, which always validates the reply against a
    Pydantic model before returning it.
    """

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> str:
        """
        Send a prompt and get the raw text response.

        Args:
            prompt: The user prompt
            system_prompt: Optional system instructions
            max_tokens: Maximum tokens in the response
            temperature: Sampling temperature (0-1)
            **kwargs: Provider-specific options

        Returns:
            The AI's response text
        """
        pass

    @abstractmethod
    async def generate_json(
        self,
        prompt: str,
        schema: Type[T],
        system_prompt: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.3,
        **kwargs: Any,
    ) -> T:
        """
        Send a prompt and get a response validated against schema.

        Args:
            prompt: The user prompt
            schema: Pydantic model the reply must conform to
            system_prompt: Optional system instructions
            max_tokens: Maximum tokens in the response
            temperature: Sampling temperature (0-1)

        Returns:
            An instance of schema

        Raises:
            AIResponseError: If the reply is empty, not JSON, or fails validation
        """
        pass


def schema_instructions(schema: Type[BaseModel]) -> str:
    """Prompt suffix asking for a bare JSON object matching schema."""
    return (
        "\n\nRespond ONLY with a valid JSON object (no markdown, no commentary) "
        "that conforms to this JSON Schema:\n"
        f"{json.dumps(schema.model_json_schema(), ensure_ascii=False)}"
    )


def parse_json_reply(text: Optional[str], schema: Type[T]) -> T:
    """
    Validate a raw model reply against schema.

    Markdown code fences and prose around the outermost JSON object are
    tolerated.

    Raises:
        AIResponseError: If the reply is empty or invalid
    """
    if not text or not text.strip():
        raise AIResponseError("Empty response from AI provider")

    cleaned = _FENCE_RE.sub("", text.strip())
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start:end + 1]

    try:
        return schema.model_validate_json(cleaned)
    except ValidationError as e:
        raise AIResponseError(
            f"AI response does not match {schema.__name__}: {e.error_count()} error(s)"
        ) from e
