"""
Abstract authentication provider interface.

Defines the contract that all auth providers must implement.
This allows swapping between different identity sources (Stack Auth,
local JWT) without changing application code.

Example:
    from common.auth import AuthProvider, JWTAuth, StackAuth

    def get_auth_provider(settings) -> AuthProvider:
        if settings.AUTH_PROVIDER == "jwt":
            return JWTAuth(secret=settings.JWT_SECRET)
        return StackAuth(
            project_id=settings.STACK_PROJECT_ID,
            secret_server_key=settings.STACK_SECRET_SERVER_KEY,
        )
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """
    Abstract authentication provider.

    User accounts live with the identity provider; this application only
    verifies the tokens it issues.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify an access token and return its identity claims.

        Args:
            token: The access token to verify

        Returns:
            Claims dict with at least "sub" (user ID), plus "email" and
            "name" when the provider knows them

        Raises:
            ValueError: If token is invalid or expired
        """
        pass
