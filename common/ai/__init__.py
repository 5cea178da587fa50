"""
AI module - Pluggable AI providers (Gemini, Claude).
"""

from common.ai.base import AIProvider, AIResponseError, parse_json_reply
from common.ai.claude import ClaudeProvider
from common.ai.gemini import GeminiProvider

__all__ = [
    "AIProvider",
    "AIResponseError",
    "parse_json_reply",
    "ClaudeProvider",
    "GeminiProvider",
]
