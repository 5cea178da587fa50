"""
Learning path persistence services.
"""

from blimari.services.learning_path.learning_path_service import (
    LearningPathService,
    compute_progress,
)

__all__ = ["LearningPathService", "compute_progress"]
