"""
Anthropic Claude AI provider implementation.

Provides text and JSON generation using the Anthropic API.

Example:
    from common.ai import ClaudeProvider

    claude = ClaudeProvider(api_key="your-api-key")
    response = await claude.generate_text(
        prompt="Hello, how are you?",
        system_prompt="You are a helpful assistant."
    )
"""

from typing import Any, Dict, Optional, Type

from common.ai.base import AIProvider, T, parse_json_reply, schema_instructions


class ClaudeProvider(AIProvider):
    """
    Anthropic Claude AI provider.

    Claude has no JSON response mode, so generate_json appends the schema to
    the prompt and validates whatever text comes back.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5-20250929",
        max_retries: int = 3,
        timeout: float = 60.0,
    ):
        """
        Initialize Claude provider.

        Args:
            api_key: Anthropic API key
            model: Model to use (default: claude-sonnet-4-5-20250929)
            max_retries: Number of retries for failed requests
            timeout: Request timeout in seconds
        """
        try:
            from anthropic import AsyncAnthropic
        except ImportError:
            raise ImportError(
                "anthropic package is required for Claude. "
                "Install with: pip install anthropic"
            )

        self.client = AsyncAnthropic(
            api_key=api_key,
            max_retries=max_retries,
            timeout=timeout,
        )
        self.model = model

    async def _create(
        self,
        prompt: str,
        system_prompt: Optional[str],
        max_tokens: int,
        temperature: float,
        **kwargs: Any,
    ) -> str:
        params: Dict[str, Any] = {
            "model": kwargs.get("model", self.model),
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

        if system_prompt:
            params["system"] = system_prompt

        response = await self.client.messages.create(**params)
        return "".join(
            block.text for block in response.content if block.type == "text"
        )

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> str:
        """Send prompt and get response from Claude."""
        return await self._create(prompt, system_prompt, max_tokens, temperature, **kwargs)

    async def generate_json(
        self,
        prompt: str,
        schema: Type[T],
        system_prompt: Optional[str] = None,
        max_tokens: int = 4096,
        temperature: float = 0.3,
        **kwargs: Any,
    ) -> T:
        """Send prompt and get a schema-validated JSON response from Claude."""
        text = await self._create(
            prompt + schema_instructions(schema),
            system_prompt,
            max_tokens,
            temperature,
            **kwargs,
        )
        return parse_json_reply(text, schema)
