"""
Pydantic models for learning paths.

Matches the documents stored in the learningPaths collection, where each
path embeds its content items and organized trail.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from blimari.schemas.content import ContentItem, OrganizedTrail


# =============================================================================
# Response Schemas (used inside success_response data)
# =============================================================================

class LearningPath(BaseModel):
    """A user-owned curriculum with derived progress."""
    id: str
    userId: str
    title: str
    topic: str
    difficulty: str = "beginner"  # "beginner" | "intermediate" | "advanced"
    description: str = ""
    status: str = "active"  # "active" | "completed"
    totalContent: int = 0
    completedContent: int = 0
    progress: int = 0  # Percentage (0-100)
    estimatedDuration: Optional[int] = None  # Minutes
    culturalProfileId: Optional[str] = None
    organizedTrail: Optional[OrganizedTrail] = None
    content: List[ContentItem] = Field(default_factory=list)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


# =============================================================================
# Request Schemas
# =============================================================================

class SaveLearningPathRequest(BaseModel):
    """Request body for POST /learning-paths/save."""
    title: str = ""
    topic: str = ""
    difficulty: str = ""
    description: str = ""
    organizedTrail: Optional[OrganizedTrail] = None
    content: List[ContentItem] = Field(default_factory=list)


class GenerateLearningPathRequest(BaseModel):
    """Request body for POST /learning-paths/generate."""
    topic: str = ""
    sources: List[str] = Field(default_factory=list)
    answers: List[str] = Field(default_factory=list)
    language: str = "pt-BR"
    title: Optional[str] = None
    description: Optional[str] = None


class ProgressUpdateRequest(BaseModel):
    """Request body for POST /learning-paths/progress."""
    learningPathId: Optional[str] = None
    contentId: Optional[str] = None
    isCompleted: Optional[bool] = None
