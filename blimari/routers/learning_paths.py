"""
FastAPI router for learning path endpoints.

Generation, saving, listing, progress tracking and next-lesson lookup.
A path owned by another user is reported as not found.
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query

from blimari.dependencies import (
    get_content_filter_service,
    get_content_organizer_service,
    get_discovery_service,
    get_learning_path_service,
    get_qloo_service,
    get_user_service,
    require_auth,
)
from blimari.pipelines.learning_paths import (
    generate_learning_path_pipeline,
    save_learning_path_pipeline,
    update_progress_pipeline,
)
from blimari.schemas.learning_path import (
    LearningPath,
    GenerateLearningPathRequest,
    ProgressUpdateRequest,
    SaveLearningPathRequest,
)
from blimari.services.ai import ContentFilterService, ContentOrganizerService
from blimari.services.content import DiscoveryService
from blimari.services.learning_path import LearningPathService
from blimari.services.qloo_service import QlooService
from blimari.services.user import UserService
from common.utils import success_response
from common.utils.exceptions import BadRequestException, ForbiddenException, NotFoundException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/learning-paths", tags=["learning-paths"])


def _missing_parameters() -> BadRequestException:
    return BadRequestException(message="Missing required parameters", code="MISSING_PARAMETERS")


@router.post("/generate")
async def generate_learning_path(
    body: GenerateLearningPathRequest,
    user: Annotated[dict, Depends(require_auth)],
    discovery: Annotated[DiscoveryService, Depends(get_discovery_service)],
    content_filter: Annotated[ContentFilterService, Depends(get_content_filter_service)],
    organizer: Annotated[ContentOrganizerService, Depends(get_content_organizer_service)],
    learning_paths: Annotated[LearningPathService, Depends(get_learning_path_service)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    qloo_service: Annotated[QlooService, Depends(get_qloo_service)],
):
    """Run search, filter, organize and finalize for the current user."""
    if not body.topic.strip():
        raise _missing_parameters()

    result = await generate_learning_path_pipeline(
        discovery=discovery,
        content_filter=content_filter,
        organizer=organizer,
        learning_paths=learning_paths,
        user_service=user_service,
        qloo_service=qloo_service,
        user=user,
        body=body,
    )
    return success_response(result)


@router.post("/save")
async def save_learning_path(
    body: SaveLearningPathRequest,
    user: Annotated[dict, Depends(require_auth)],
    learning_paths: Annotated[LearningPathService, Depends(get_learning_path_service)],
):
    """Save a learning path assembled by the client."""
    required = (body.title, body.topic, body.difficulty, body.description)
    if not all(value.strip() for value in required):
        raise _missing_parameters()
    if body.organizedTrail is None or not body.organizedTrail.organizedTrail:
        raise _missing_parameters()

    path = await save_learning_path_pipeline(learning_paths, user["id"], body)
    return success_response(learningPath=path)


@router.get("", response_model=List[LearningPath])
async def list_learning_paths(
    user: Annotated[dict, Depends(require_auth)],
    learning_paths: Annotated[LearningPathService, Depends(get_learning_path_service)],
    user_id: Optional[str] = Query(None, alias="userId"),
):
    """List the current user's learning paths, most recently updated first."""
    if user_id and user_id != user["id"]:
        raise ForbiddenException(message="Cannot list another user's learning paths")

    return await learning_paths.list_learning_paths(user["id"])


@router.get("/next-lesson")
async def get_next_lesson(
    user: Annotated[dict, Depends(require_auth)],
    learning_paths: Annotated[LearningPathService, Depends(get_learning_path_service)],
):
    """First incomplete item of the most recently updated active path."""
    lesson = await learning_paths.find_next_lesson(user["id"])
    if not lesson:
        return {"success": True, "data": None, "message": "No next lesson found."}
    return success_response(lesson)


@router.post("/progress")
async def update_progress(
    body: ProgressUpdateRequest,
    user: Annotated[dict, Depends(require_auth)],
    learning_paths: Annotated[LearningPathService, Depends(get_learning_path_service)],
):
    """Mark a content item (in)complete and recompute path progress."""
    if not body.learningPathId or not body.contentId or body.isCompleted is None:
        raise _missing_parameters()

    path = await update_progress_pipeline(
        learning_paths,
        user_id=user["id"],
        path_id=body.learningPathId,
        content_id=body.contentId,
        is_completed=body.isCompleted,
    )
    return success_response(path, message="Progress updated successfully.")


@router.get("/{path_id}")
async def get_learning_path(
    path_id: str,
    user: Annotated[dict, Depends(require_auth)],
    learning_paths: Annotated[LearningPathService, Depends(get_learning_path_service)],
):
    """Get a learning path with its content and trail."""
    path = await learning_paths.get_learning_path(path_id, user_id=user["id"])
    if not path:
        raise NotFoundException(message="Learning path not found")
    return success_response(path)


@router.get("/{path_id}/{content_id}")
async def get_content_item(
    path_id: str,
    content_id: str,
    user: Annotated[dict, Depends(require_auth)],
    learning_paths: Annotated[LearningPathService, Depends(get_learning_path_service)],
):
    """Get one content item of a learning path."""
    item = await learning_paths.get_content_item(path_id, content_id, user_id=user["id"])
    if not item:
        raise NotFoundException(message="Content item not found")
    return success_response(item)
