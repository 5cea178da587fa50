"""
Authentication module - Pluggable auth providers (Stack Auth, JWT).
"""

from common.auth.base import AuthProvider
from common.auth.jwt_auth import JWTAuth
from common.auth.stack_auth import StackAuth
from common.auth.dependencies import (
    create_auth_dependency,
    extract_token,
)

__all__ = [
    "AuthProvider",
    "JWTAuth",
    "StackAuth",
    "create_auth_dependency",
    "extract_token",
]
