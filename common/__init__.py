"""
Common library for reusable infrastructure components.

This package provides generic modules that are independent of the
learning-path domain:

- database: Async MongoDB connection (Motor)
- auth: Pluggable authentication (Stack Auth, JWT)
- ai: Pluggable AI providers (Gemini, Claude) with schema-validated JSON
- utils: Standard responses and exceptions
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth, StackAuth, create_auth_dependency
from common.ai import AIProvider, AIResponseError, ClaudeProvider, GeminiProvider
from common.utils import (
    success_response,
    error_response,
    APIException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    InternalServerException,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "JWTAuth",
    "StackAuth",
    "create_auth_dependency",
    # AI
    "AIProvider",
    "AIResponseError",
    "ClaudeProvider",
    "GeminiProvider",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "InternalServerException",
    # Config
    "BaseAppSettings",
]
