"""
User service for locally mirrored identities.

Users are owned by the external identity provider; this service keeps a
local record keyed by the provider's user ID, plus the optional cultural
profile attached to it.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

logger = logging.getLogger(__name__)


class UserService:
    """
    Manages local user records and cultural profiles.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize UserService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._users_collection = db["users"]
        self._profiles_collection = db["culturalProfiles"]
        self._paths_collection = db["learningPaths"]

    async def ensure_indexes(self) -> None:
        """Create the indexes user lookups rely on."""
        await self._users_collection.create_index("id", unique=True)
        await self._users_collection.create_index("email")
        await self._profiles_collection.create_index("userId", unique=True)

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user by external ID."""
        doc = await self._users_collection.find_one({"id": user_id})
        return self._format_user(doc) if doc else None

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get a user by email (case-insensitive)."""
        if not email:
            return None
        doc = await self._users_collection.find_one({"email": email.lower()})
        return self._format_user(doc) if doc else None

    async def create_user(
        self,
        user_id: str,
        email: Optional[str] = None,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a local user record.

        Args:
            user_id: External identity provider's user ID
            email: Primary email
            name: Display name
            avatar_url: Profile image URL

        Returns:
            Created user
        """
        now = datetime.now(timezone.utc)
        user_doc = {
            "id": user_id,
            "email": email.lower() if email else None,
            "name": name,
            "avatarUrl": avatar_url,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self._users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            # Concurrent first request already created it
            logger.info(f"User {user_id} already exists, returning stored record")
            return await self.get_user(user_id)
        user_doc["_id"] = result.inserted_id

        logger.info(f"Created user {user_id}")
        return self._format_user(user_doc)

    async def relink_user(
        self,
        old_id: str,
        new_id: str,
        name: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Move an existing user record to a new external ID.

        Happens when the identity provider issues a new ID for an email we
        already know. Owned learning paths and the cultural profile follow.

        Returns:
            Updated user, or None if old_id does not exist
        """
        updates: Dict[str, Any] = {
            "id": new_id,
            "updatedAt": datetime.now(timezone.utc),
        }
        if name:
            updates["name"] = name

        result = await self._users_collection.update_one(
            {"id": old_id},
            {"$set": updates},
        )
        if result.matched_count == 0:
            return None

        await self._paths_collection.update_many({"userId": old_id}, {"$set": {"userId": new_id}})
        await self._profiles_collection.update_many({"userId": old_id}, {"$set": {"userId": new_id}})

        logger.info(f"Relinked user {old_id} -> {new_id}")
        return await self.get_user(new_id)

    async def get_cultural_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get a user's cultural profile, or None."""
        doc = await self._profiles_collection.find_one({"userId": user_id})
        if not doc:
            return None
        doc.pop("_id", None)
        return doc

    async def create_cultural_profile(self, profile: Dict[str, Any]) -> Dict[str, Any]:
        """
        Store a cultural profile.

        Args:
            profile: QlooProfile-shaped dict

        Returns:
            Stored profile
        """
        profile_doc = dict(profile)
        await self._profiles_collection.insert_one(profile_doc)
        profile_doc.pop("_id", None)

        logger.info(f"Stored cultural profile {profile_doc.get('id')} for user {profile_doc.get('userId')}")
        return profile_doc

    def _format_user(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": doc["id"],
            "email": doc.get("email"),
            "name": doc.get("name"),
            "avatarUrl": doc.get("avatarUrl"),
            "createdAt": doc.get("createdAt"),
            "updatedAt": doc.get("updatedAt"),
        }
