"""
Learning path pipeline functions.

Stateless orchestration logic for generating, saving and progressing
learning paths.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo.errors import PyMongoError

from common.utils.exceptions import InternalServerException, NotFoundException
from blimari.pipelines.workflow import LearningPathWorkflow, ProgressCallback
from blimari.schemas.content import ContentItem, OrganizedTrail
from blimari.schemas.learning_path import GenerateLearningPathRequest, SaveLearningPathRequest
from blimari.services.ai.content_filter import ContentFilterService
from blimari.services.ai.content_organizer import (
    ContentOrganizerService,
    sanitize_trail,
    single_section_trail,
)
from blimari.services.content.discovery_service import DiscoveryService
from blimari.services.learning_path.learning_path_service import LearningPathService
from blimari.services.qloo_service import QlooService
from blimari.services.user.user_service import UserService

logger = logging.getLogger(__name__)

SAVED_TRAIL_TITLE = "Trilha Completa"


async def generate_learning_path_pipeline(
    discovery: DiscoveryService,
    content_filter: ContentFilterService,
    organizer: ContentOrganizerService,
    learning_paths: LearningPathService,
    user_service: UserService,
    qloo_service: Optional[QlooService],
    user: Dict[str, Any],
    body: GenerateLearningPathRequest,
    on_progress: Optional[ProgressCallback] = None,
) -> Dict[str, Any]:
    """
    Run the full search -> filter -> organize -> finalize workflow.

    Args:
        discovery: Content discovery service
        content_filter: AI filter service
        organizer: AI organizer service
        learning_paths: Persistence for the finished path
        user_service: For the user's cultural profile
        qloo_service: For cultural insights added to the profile (optional)
        user: Current user
        body: Topic, sources, answers and language
        on_progress: Optional snapshot callback

    Returns:
        Workflow result dict
    """
    profile = None
    try:
        profile = await user_service.get_cultural_profile(user["id"])
    except PyMongoError as e:
        logger.warning(f"Could not load cultural profile for user {user['id']}: {e}")

    if profile and qloo_service is not None and qloo_service.is_configured:
        insights = await qloo_service.get_cultural_insights(profile.get("qlooTasteId"))
        if insights:
            profile = {**profile, "insights": insights}

    workflow = LearningPathWorkflow(
        discovery=discovery,
        content_filter=content_filter,
        organizer=organizer,
        learning_paths=learning_paths,
        topic=body.topic.strip(),
        sources=body.sources,
        answers=body.answers,
        user_id=user["id"],
        language=body.language,
        profile=profile,
        title=body.title,
        description=body.description,
        on_progress=on_progress,
    )

    result = await workflow.run()
    return result.to_dict()


def _items_from_trail(trail: OrganizedTrail) -> List[ContentItem]:
    """Minimal content records built from the trail entries themselves."""
    items = []
    for section in trail.organizedTrail:
        for entry in section.items:
            extra = entry.model_extra or {}
            items.append(ContentItem(
                id=entry.id,
                title=extra.get("title") or entry.id,
                description=entry.organizedDescription or extra.get("description") or "",
                url=extra.get("url") or "",
                source=extra.get("source") or "web",
                type=extra.get("type") or "article",
                duration=extra.get("duration") if isinstance(extra.get("duration"), int) else None,
                author=extra.get("author"),
                rating=extra.get("rating") if isinstance(extra.get("rating"), (int, float)) else None,
                thumbnail=extra.get("thumbnail"),
            ))
    return items


async def save_learning_path_pipeline(
    learning_paths: LearningPathService,
    user_id: str,
    body: SaveLearningPathRequest,
) -> Dict[str, Any]:
    """
    Persist a learning path assembled by the client.

    The stored content is body.content when given, otherwise the items
    referenced by the trail. Trail references to content that is not
    stored are dropped.

    Raises:
        InternalServerException: If the database write fails
    """
    trail = body.organizedTrail
    items = body.content or _items_from_trail(trail)

    trail = sanitize_trail(trail, {item.id for item in items})
    if not trail.organizedTrail and items:
        trail = single_section_trail(items, SAVED_TRAIL_TITLE)

    path = {
        "title": body.title,
        "topic": body.topic,
        "difficulty": body.difficulty,
        "description": body.description,
        "organizedTrail": trail,
    }

    try:
        return await learning_paths.create_learning_path(user_id, path, items)
    except PyMongoError as e:
        logger.error(f"Failed to save learning path for user {user_id}: {e}", exc_info=True)
        raise InternalServerException(
            message="Failed to save learning path",
            code="LEARNING_PATH_SAVE_FAILED",
        )


async def update_progress_pipeline(
    learning_paths: LearningPathService,
    user_id: str,
    path_id: str,
    content_id: str,
    is_completed: bool,
) -> Dict[str, Any]:
    """
    Set a content item's completion flag and recompute path progress.

    Args:
        learning_paths: Persistence service
        user_id: Current user (must own the path)
        path_id: Learning path ID
        content_id: Content item ID
        is_completed: New completion flag

    Returns:
        The updated learning path

    Raises:
        NotFoundException: Path not owned by user, or item not in path
        InternalServerException: If a database write fails
    """
    path = await learning_paths.get_learning_path(path_id, user_id=user_id)
    if not path:
        raise NotFoundException(message="Learning path not found")

    try:
        updated = await learning_paths.update_content_item_completion(path_id, content_id, is_completed)
        if not updated:
            raise NotFoundException(message="Content item not found")

        stats = await learning_paths.recompute_progress(path_id)
        logger.info(
            f"Path {path_id}: item {content_id} completed={is_completed}, "
            f"progress now {stats['progress'] if stats else 'n/a'}%"
        )

        return await learning_paths.get_learning_path(path_id, user_id=user_id)
    except PyMongoError as e:
        logger.error(f"Failed to update progress for path {path_id}: {e}", exc_info=True)
        raise InternalServerException(
            message="Failed to update progress",
            code="PROGRESS_UPDATE_FAILED",
        )
