"""
Blimari request/response schemas.
"""

from blimari.schemas.content import (
    ContentItem,
    TrailItem,
    TrailSection,
    OrganizedTrail,
    FilterDecision,
    DiscoverRequest,
    FilterRequest,
    OrganizeRequest,
)
from blimari.schemas.ai import (
    QuestionOption,
    Question,
    QuestionSet,
    Insights,
    QuestionsRequest,
    InsightsRequest,
)
from blimari.schemas.learning_path import (
    LearningPath,
    SaveLearningPathRequest,
    GenerateLearningPathRequest,
    ProgressUpdateRequest,
)
from blimari.schemas.user import User, QlooProfile

__all__ = [
    # Content
    "ContentItem",
    "TrailItem",
    "TrailSection",
    "OrganizedTrail",
    "FilterDecision",
    "DiscoverRequest",
    "FilterRequest",
    "OrganizeRequest",
    # AI
    "QuestionOption",
    "Question",
    "QuestionSet",
    "Insights",
    "QuestionsRequest",
    "InsightsRequest",
    # Learning paths
    "LearningPath",
    "SaveLearningPathRequest",
    "GenerateLearningPathRequest",
    "ProgressUpdateRequest",
    # Users
    "User",
    "QlooProfile",
]
