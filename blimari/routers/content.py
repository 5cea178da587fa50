"""
FastAPI router for content curation endpoints.

Discovery, AI filtering and AI organization. Filter and organize always
answer 200: when the AI call fails the body carries the fallback.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from blimari.config import Settings
from blimari.dependencies import (
    get_content_filter_service,
    get_content_organizer_service,
    get_discovery_service,
    get_settings,
)
from blimari.schemas.content import DiscoverRequest, FilterRequest, OrganizeRequest
from blimari.services.ai import ContentFilterService, ContentOrganizerService
from blimari.services.content import DiscoveryService, rank_by_rating
from common.utils import success_response
from common.utils.exceptions import BadRequestException

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


def _missing_parameters() -> BadRequestException:
    return BadRequestException(message="Missing required parameters", code="MISSING_PARAMETERS")


@router.post("/discover")
async def discover_content(
    body: DiscoverRequest,
    discovery: Annotated[DiscoveryService, Depends(get_discovery_service)],
    config: Annotated[Settings, Depends(get_settings)],
):
    """Search the requested sources and return the best-rated items."""
    topic = body.topic.strip()
    if not topic:
        raise _missing_parameters()

    logger.info(f"Discovering content on '{topic}' for user {body.userId or 'anonymous'}")
    content = await discovery.discover(topic, body.sources)
    ranked = rank_by_rating(content, limit=config.DISCOVERY_RESULT_LIMIT)

    return success_response(content=[item.model_dump() for item in ranked])


@router.post("/filter")
async def filter_content(
    body: FilterRequest,
    content_filter: Annotated[ContentFilterService, Depends(get_content_filter_service)],
):
    """Approve the relevant subset of a content list."""
    if body.contentList is None or body.answers is None or not body.topic.strip():
        raise _missing_parameters()

    approved_ids = await content_filter.filter_content(
        body.contentList, body.topic.strip(), body.answers
    )
    return success_response(approvedContentIds=approved_ids)


@router.post("/organize")
async def organize_content(
    body: OrganizeRequest,
    organizer: Annotated[ContentOrganizerService, Depends(get_content_organizer_service)],
):
    """Group and order approved content into a learning trail."""
    if body.contentList is None or body.answers is None or not body.topic.strip():
        raise _missing_parameters()

    trail = await organizer.organize(
        body.contentList, body.topic.strip(), body.answers, body.language
    )
    return success_response(organizedTrail=trail.model_dump())
