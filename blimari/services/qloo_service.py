"""
Qloo cultural profile client.

Creates a taste profile for each new user and reads cultural insights
that are added to the AI prompts as extra context. Profiles are
best-effort: callers tolerate their absence.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from blimari.schemas.user import QlooProfile

logger = logging.getLogger(__name__)


class QlooService:
    """Thin client over the Qloo profile and insights endpoints."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str],
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize QlooService.

        Args:
            api_key: Qloo API key
            base_url: Qloo API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._api_key = api_key
        self._base_url = (base_url or "").rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._base_url)

    async def _call(
        self,
        endpoint: str,
        method: str = "GET",
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Call a Qloo endpoint and return its JSON body.

        Raises:
            RuntimeError: If the service is not configured
            httpx.HTTPError: On network failure or non-2xx response
        """
        if not self.is_configured:
            raise RuntimeError("Qloo API key or base URL is missing")

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.request(
                method,
                f"{self._base_url}{endpoint}",
                json=data,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )

            if not response.is_success:
                logger.error(f"Qloo API error for {endpoint}: {response.status_code} {response.text}")
            response.raise_for_status()

            return response.json() if response.content else {}

    async def create_taste_profile(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a taste profile for a user.

        Args:
            user: User dict with id, email and name

        Returns:
            Dumped QlooProfile (not yet persisted)
        """
        user_id = user["id"]
        response = await self._call(
            "/users/profile",
            method="POST",
            data={"userId": user_id, "email": user.get("email"), "name": user.get("name")},
        )

        now = datetime.now(timezone.utc)
        profile = QlooProfile(
            id=response.get("profileId") or f"qloo-profile-{user_id}",
            userId=user_id,
            qlooTasteId=response.get("tasteId") or f"qloo-taste-{user_id}",
            preferences=response.get("preferences") or {},
            communicationStyle=response.get("communicationStyle") or {},
            lastSyncAt=now,
            createdAt=now,
        )
        return profile.model_dump()

    async def get_cultural_insights(self, taste_id: str) -> Dict[str, Any]:
        """
        Get cultural insights for a taste profile.

        Returns:
            Insights dict, or {} on any failure
        """
        try:
            response = await self._call(f"/users/insights/{taste_id}")
        except Exception as e:
            logger.warning(f"Failed to get cultural insights for {taste_id}: {e}")
            return {}
        return response.get("insights") or {}
