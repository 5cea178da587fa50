"""
Pydantic models for users and cultural profiles.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """Local record of an externally authenticated identity."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    avatarUrl: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class QlooProfile(BaseModel):
    """Cultural/preference profile used as extra AI prompt context."""
    id: str
    userId: str
    qlooTasteId: str
    preferences: Dict[str, Any] = Field(default_factory=dict)
    communicationStyle: Dict[str, Any] = Field(default_factory=dict)
    lastSyncAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
