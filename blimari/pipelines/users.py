"""
User pipeline functions.

Stateless orchestration logic for mirroring external identities locally.
"""

import logging
from typing import Any, Dict, Optional

from blimari.services.qloo_service import QlooService
from blimari.services.user.user_service import UserService

logger = logging.getLogger(__name__)


async def sync_user_pipeline(
    user_service: UserService,
    qloo_service: Optional[QlooService],
    identity: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Return the local user for a verified identity, creating it if needed.

    Handles:
    - Returning an already-known user unchanged
    - Relinking a known email to a new provider ID
    - Creating the user on first sight
    - Creating a cultural profile best-effort for new/relinked users

    Args:
        user_service: For user records
        qloo_service: For cultural profiles (optional)
        identity: Verified identity with id, email, name, avatarUrl

    Returns:
        Local user dict
    """
    user_id = identity["id"]

    # 1. Known user
    user = await user_service.get_user(user_id)
    if user:
        return user

    # 2. Same email under a previous provider ID
    email = identity.get("email")
    existing = await user_service.get_user_by_email(email) if email else None

    if existing:
        user = await user_service.relink_user(existing["id"], user_id, identity.get("name"))

    # 3. First sight
    if not user:
        user = await user_service.create_user(
            user_id=user_id,
            email=email,
            name=identity.get("name"),
            avatar_url=identity.get("avatarUrl"),
        )

    # 4. Cultural profile, tolerated as absent
    await ensure_cultural_profile(user_service, qloo_service, user)

    return user


async def ensure_cultural_profile(
    user_service: UserService,
    qloo_service: Optional[QlooService],
    user: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Create a cultural profile for the user if they have none.

    Never raises: any failure leaves the user without a profile.
    """
    if qloo_service is None or not qloo_service.is_configured:
        logger.debug("Cultural profiles not configured, skipping")
        return None

    try:
        existing = await user_service.get_cultural_profile(user["id"])
        if existing:
            return existing

        profile = await qloo_service.create_taste_profile(user)
        return await user_service.create_cultural_profile(profile)
    except Exception as e:
        logger.warning(f"Could not create cultural profile for user {user['id']}: {e}")
        return None
