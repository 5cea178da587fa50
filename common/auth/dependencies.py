"""
FastAPI authentication dependencies.

Provides factory functions to create auth dependencies that can be
injected into route handlers. Works with any AuthProvider implementation.

The token is read from the Authorization header first and from the session
cookie second, so both API clients and browser sessions are accepted.

Example:
    from common.auth import JWTAuth, create_auth_dependency

    auth = JWTAuth(secret="your-secret")
    get_identity = create_auth_dependency(lambda: auth)

    @app.get("/profile")
    async def get_profile(identity: dict = Depends(get_identity)):
        return {"user_id": identity["id"]}
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Request

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException


def extract_token(
    authorization: Optional[str],
    cookie_value: Optional[str] = None,
    scheme: str = "Bearer",
) -> Optional[str]:
    """
    Pull the access token from an Authorization header or a cookie value.

    Returns:
        The token, or None if neither source carries one
    """
    prefix = f"{scheme} "
    if authorization and authorization.startswith(prefix):
        token = authorization[len(prefix):].strip()
        if token:
            return token

    if cookie_value:
        return cookie_value.strip() or None

    return None


def claims_to_identity(claims: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize provider claims to the identity dict handlers receive."""
    return {
        "id": claims.get("sub") or claims.get("uid"),
        "email": claims.get("email"),
        "name": claims.get("name"),
        "avatarUrl": claims.get("avatarUrl"),
    }


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    cookie_name: str = "stack-access",
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Factory to create FastAPI auth dependencies.

    Args:
        get_auth_provider: Callable that returns the AuthProvider instance
        cookie_name: Session cookie consulted when the header is absent
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        A FastAPI dependency returning the caller's identity dict
    """

    async def get_current_identity(request: Request) -> Dict[str, Any]:
        """
        Extract and verify the caller's identity.

        Raises:
            UnauthorizedException: If token is missing, invalid, or expired
        """
        token = extract_token(
            request.headers.get(header_name),
            request.cookies.get(cookie_name),
            scheme,
        )

        if not token:
            raise UnauthorizedException(
                message="Authentication required",
                code="AUTH_REQUIRED",
            )

        auth = get_auth_provider()
        try:
            claims = await auth.verify_token(token)
        except ValueError as e:
            raise UnauthorizedException(message=str(e), code="INVALID_SESSION")

        identity = claims_to_identity(claims)
        if not identity["id"]:
            raise UnauthorizedException(
                message="Token missing user ID",
                code="INVALID_SESSION",
            )

        return identity

    return get_current_identity
