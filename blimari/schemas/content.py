"""
Pydantic models for content discovery, filtering and organization.

ContentItem is the one normalized shape every source produces. The trail
models double as the output schema of the organize AI call, and
FilterDecision as the output schema of the filter AI call.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Core Models
# =============================================================================

class ContentItem(BaseModel):
    """A discovered or curated learning resource."""
    id: str
    title: str
    description: str = ""
    url: str = ""
    source: str  # "youtube" | "github" | "web" | "books"
    type: str  # "video" | "repository" | "article" | "book" | "documentation"
    duration: Optional[int] = None  # Minutes
    author: Optional[str] = None
    rating: Optional[float] = None  # 0 to 5
    thumbnail: Optional[str] = None
    isApproved: Optional[bool] = None
    isCompleted: bool = False
    completedAt: Optional[datetime] = None
    orderIndex: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class TrailItem(BaseModel):
    """
    Reference to a content item inside a trail section.

    Clients may send full content records as trail items; the extra
    fields are kept so a path can be saved from the trail alone.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    organizedDescription: str = ""


class TrailSection(BaseModel):
    """A titled, ordered group of trail items."""
    sectionTitle: str
    items: List[TrailItem] = Field(default_factory=list)


class OrganizedTrail(BaseModel):
    """Sectioned curriculum. Section and item order is presentation order."""
    organizedTrail: List[TrailSection] = Field(default_factory=list)

    def item_ids(self) -> List[str]:
        """All referenced content IDs, in trail order."""
        return [item.id for section in self.organizedTrail for item in section.items]

    def item_count(self) -> int:
        return sum(len(section.items) for section in self.organizedTrail)


class FilterDecision(BaseModel):
    """Output of the filter AI call."""
    approvedContentIds: List[str]


# =============================================================================
# Request Schemas
# =============================================================================

class DiscoverRequest(BaseModel):
    """Request body for POST /content/discover."""
    topic: str = ""
    sources: List[str] = Field(default_factory=list)
    answers: List[str] = Field(default_factory=list)
    userId: Optional[str] = None


class FilterRequest(BaseModel):
    """Request body for POST /content/filter."""
    contentList: Optional[List[ContentItem]] = None
    topic: str = ""
    answers: Optional[List[str]] = None


class OrganizeRequest(BaseModel):
    """Request body for POST /content/organize."""
    contentList: Optional[List[ContentItem]] = None
    topic: str = ""
    answers: Optional[List[str]] = None
    language: str = "pt-BR"
