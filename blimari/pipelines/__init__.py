"""
Pipeline functions.

Stateless orchestration logic extracted from route handlers.
"""

from blimari.pipelines.workflow import (
    LearningPathWorkflow,
    WorkflowResult,
    WorkflowState,
    StepStatus,
)
from blimari.pipelines.users import sync_user_pipeline, ensure_cultural_profile
from blimari.pipelines.learning_paths import (
    generate_learning_path_pipeline,
    save_learning_path_pipeline,
    update_progress_pipeline,
)

__all__ = [
    "LearningPathWorkflow",
    "WorkflowResult",
    "WorkflowState",
    "StepStatus",
    "sync_user_pipeline",
    "ensure_cultural_profile",
    "generate_learning_path_pipeline",
    "save_learning_path_pipeline",
    "update_progress_pipeline",
]
