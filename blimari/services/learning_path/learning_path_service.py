"""
Learning path persistence.

Each learning path is one document in the learningPaths collection that
embeds its ordered content items and organized trail. Creating a path is
therefore a single atomic insert, and progress is always derived from the
embedded items' completion flags.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from blimari.schemas.content import ContentItem, OrganizedTrail

logger = logging.getLogger(__name__)


def compute_progress(completed: int, total: int) -> int:
    """
    Completion percentage, rounded half-up.

    Returns 0 when there is no content.
    """
    if total <= 0:
        return 0
    return math.floor(100 * completed / total + 0.5)


def _to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a path ID; None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if value and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def _dedupe(items: Iterable[ContentItem]) -> List[ContentItem]:
    """Keep the first item for each ID."""
    seen = set()
    unique = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        unique.append(item)
    return unique


class LearningPathService:
    """
    Stores learning paths and tracks completion.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize LearningPathService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._paths_collection = db["learningPaths"]

    async def ensure_indexes(self) -> None:
        """Create the indexes path listings rely on."""
        await self._paths_collection.create_index([("userId", 1), ("updatedAt", -1)])

    # ─────────────────────────────────────────────────────────────────
    # Writes
    # ─────────────────────────────────────────────────────────────────

    async def create_learning_path(
        self,
        user_id: str,
        path: Dict[str, Any],
        items: List[ContentItem],
    ) -> Dict[str, Any]:
        """
        Insert a learning path together with its content items.

        Args:
            user_id: Owner's user ID
            path: title, topic, difficulty, description, organizedTrail and
                optionally culturalProfileId
            items: Content in presentation order

        Returns:
            The created learning path
        """
        items = _dedupe(items)
        now = datetime.now(timezone.utc)

        content_docs = []
        for index, item in enumerate(items):
            doc = item.model_dump()
            doc.update({
                "orderIndex": index,
                "isCompleted": False,
                "completedAt": None,
            })
            content_docs.append(doc)

        trail = path.get("organizedTrail")
        if isinstance(trail, OrganizedTrail):
            trail = trail.model_dump()

        durations = [item.duration for item in items if item.duration]

        path_doc = {
            "userId": user_id,
            "title": path["title"],
            "topic": path["topic"],
            "difficulty": path.get("difficulty") or "beginner",
            "description": path.get("description") or "",
            "status": "active",
            "totalContent": len(content_docs),
            "completedContent": 0,
            "progress": 0,
            "estimatedDuration": sum(durations) if durations else None,
            "culturalProfileId": path.get("culturalProfileId"),
            "organizedTrail": trail,
            "content": content_docs,
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._paths_collection.insert_one(path_doc)
        path_doc["_id"] = result.inserted_id

        logger.info(
            f"Created learning path {result.inserted_id} for user {user_id} "
            f"with {len(content_docs)} items"
        )
        return self._format_path(path_doc)

    async def update_content_item_completion(
        self,
        path_id: str,
        content_id: str,
        completed: bool,
    ) -> bool:
        """
        Set one content item's completion flag and timestamp.

        Returns:
            False when no item matched
        """
        oid = _to_object_id(path_id)
        if oid is None:
            return False

        now = datetime.now(timezone.utc)
        result = await self._paths_collection.update_one(
            {"_id": oid, "content.id": content_id},
            {"$set": {
                "content.$.isCompleted": completed,
                "content.$.completedAt": now if completed else None,
                "updatedAt": now,
            }},
        )
        return result.matched_count > 0

    async def recompute_progress(self, path_id: str) -> Optional[Dict[str, Any]]:
        """
        Recompute progress from the embedded items' completion flags.

        Idempotent: with no intervening completion change, repeated calls
        write the same values.

        Returns:
            Dict with progress, completedContent, totalContent and status,
            or None when the path does not exist
        """
        oid = _to_object_id(path_id)
        if oid is None:
            return None

        doc = await self._paths_collection.find_one(
            {"_id": oid},
            {"content.isCompleted": 1},
        )
        if not doc:
            return None

        content = doc.get("content", [])
        total = len(content)
        completed = sum(1 for item in content if item.get("isCompleted"))
        progress = compute_progress(completed, total)

        stats = {
            "progress": progress,
            "completedContent": completed,
            "totalContent": total,
            "status": "completed" if total > 0 and progress == 100 else "active",
        }

        await self._paths_collection.update_one(
            {"_id": oid},
            {"$set": {**stats, "updatedAt": datetime.now(timezone.utc)}},
        )
        return stats

    # ─────────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────────

    async def get_learning_path(
        self,
        path_id: str,
        user_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Get a learning path with its content.

        Args:
            path_id: Learning path ID
            user_id: When given, only a path owned by this user is returned

        Returns:
            Learning path dict or None
        """
        oid = _to_object_id(path_id)
        if oid is None:
            return None

        query: Dict[str, Any] = {"_id": oid}
        if user_id is not None:
            query["userId"] = user_id

        doc = await self._paths_collection.find_one(query)
        return self._format_path(doc) if doc else None

    async def list_learning_paths(self, user_id: str, limit: int = 100) -> List[Dict[str, Any]]:
        """
        List a user's learning paths, most recently updated first.

        Content and trail are left out of the listing.
        """
        cursor = self._paths_collection.find(
            {"userId": user_id},
            {"content": 0, "organizedTrail": 0},
        ).sort("updatedAt", -1)

        docs = await cursor.to_list(length=limit)
        return [self._format_path(doc) for doc in docs]

    async def get_content_item(
        self,
        path_id: str,
        content_id: str,
        user_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Get one content item of a path, or None."""
        oid = _to_object_id(path_id)
        if oid is None:
            return None

        query: Dict[str, Any] = {"_id": oid, "content.id": content_id}
        if user_id is not None:
            query["userId"] = user_id

        doc = await self._paths_collection.find_one(query, {"content.$": 1})
        if not doc or not doc.get("content"):
            return None
        return doc["content"][0]

    async def find_next_lesson(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        First incomplete item, in trail order, of the user's most recently
        updated active path.

        Returns:
            Dict with learningPathId, learningPathTitle, topic, sectionTitle
            and content, or None when nothing is pending
        """
        doc = await self._paths_collection.find_one(
            {"userId": user_id, "status": "active"},
            sort=[("updatedAt", -1)],
        )
        if not doc:
            return None

        by_id = {item["id"]: item for item in doc.get("content", [])}
        trail = (doc.get("organizedTrail") or {}).get("organizedTrail", [])

        placed = set()
        for section in trail:
            for entry in section.get("items", []):
                item = by_id.get(entry.get("id"))
                if item is None or entry["id"] in placed:
                    continue
                placed.add(entry["id"])
                if not item.get("isCompleted"):
                    return self._format_lesson(doc, item, section.get("sectionTitle"))

        # Items the trail does not reference come last, by orderIndex
        remaining = sorted(
            (item for item_id, item in by_id.items() if item_id not in placed),
            key=lambda item: item.get("orderIndex") or 0,
        )
        for item in remaining:
            if not item.get("isCompleted"):
                return self._format_lesson(doc, item, None)

        return None

    # ─────────────────────────────────────────────────────────────────
    # Formatting
    # ─────────────────────────────────────────────────────────────────

    def _format_path(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a stored document to the API shape."""
        formatted = {key: value for key, value in doc.items() if key != "_id"}
        formatted["id"] = str(doc["_id"])
        return formatted

    def _format_lesson(
        self,
        doc: Dict[str, Any],
        item: Dict[str, Any],
        section_title: Optional[str],
    ) -> Dict[str, Any]:
        return {
            "learningPathId": str(doc["_id"]),
            "learningPathTitle": doc.get("title"),
            "topic": doc.get("topic"),
            "sectionTitle": section_title,
            "content": item,
        }
