"""
Stack Auth authentication provider.

Verifies access tokens issued by Stack Auth by asking its REST API who the
token belongs to, using the project's server credentials.

Example:
    auth = StackAuth(project_id="...", secret_server_key="...")
    claims = await auth.verify_token(access_token)
    print(claims["sub"], claims["email"])
"""

import logging
from typing import Dict, Any, Optional

import httpx

from common.auth.base import AuthProvider

logger = logging.getLogger(__name__)


class StackAuth(AuthProvider):
    """Stack Auth (external identity provider) token verification."""

    def __init__(
        self,
        project_id: str,
        secret_server_key: str,
        api_url: str = "https://api.stack-auth.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Stack Auth provider.

        Args:
            project_id: Stack Auth project ID
            secret_server_key: Server key for the project
            api_url: Stack Auth API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._project_id = project_id
        self._secret_server_key = secret_server_key
        self._base_url = api_url.rstrip("/") + "/api/v1"
        self._timeout = timeout
        self._transport = transport

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Resolve the token to the Stack Auth user it was issued for."""
        headers = {
            "x-stack-access-type": "server",
            "x-stack-project-id": self._project_id,
            "x-stack-secret-server-key": self._secret_server_key,
            "x-stack-access-token": token,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(f"{self._base_url}/users/me", headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Stack Auth request failed: {e}")
            raise ValueError("Identity provider unavailable")

        if response.status_code != 200:
            logger.debug(f"Stack Auth rejected token: {response.status_code}")
            raise ValueError("Invalid or expired session")

        user = response.json()
        if not user or not user.get("id"):
            raise ValueError("Invalid or expired session")

        return {
            "sub": user["id"],
            "email": user.get("primary_email"),
            "name": user.get("display_name"),
            "avatarUrl": user.get("profile_image_url"),
        }
