"""
Learning path generation workflow.

Runs search -> filter -> organize -> finalize as an explicit finite-state
machine. Steps are strictly sequential and forward-only; a failing step
substitutes its fallback data and still completes. The whole sequence is
single-flight: run() only executes from the idle state.

Example:
    workflow = LearningPathWorkflow(
        discovery=discovery_service,
        content_filter=filter_service,
        organizer=organizer_service,
        learning_paths=learning_path_service,
        topic="Rust",
        sources=["youtube"],
        answers=["beginner"],
        user_id=user["id"],
    )
    result = await workflow.run()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from blimari.schemas.content import ContentItem, OrganizedTrail
from blimari.services.ai.content_filter import ContentFilterService
from blimari.services.ai.content_organizer import ContentOrganizerService, apply_trail
from blimari.services.content.discovery_service import DiscoveryService
from blimari.services.learning_path.learning_path_service import LearningPathService

logger = logging.getLogger(__name__)

DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")

ProgressCallback = Callable[[Dict[str, Any]], Union[None, Awaitable[None]]]


class WorkflowState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class StepStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"


@dataclass
class WorkflowStep:
    id: str
    title: str
    description: str
    status: StepStatus = StepStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
        }


def default_steps() -> List[WorkflowStep]:
    return [
        WorkflowStep("search", "Buscando Conteúdo", "Procurando os melhores recursos nas suas fontes selecionadas"),
        WorkflowStep("filter", "Filtrando Qualidade", "Analisando relevância e qualidade do conteúdo encontrado"),
        WorkflowStep("organize", "Organizando Trilha", "Estruturando o conteúdo em uma sequência lógica de aprendizado"),
        WorkflowStep("finalize", "Finalizando", "Preparando sua trilha personalizada de aprendizado"),
    ]


def difficulty_from_answers(answers: List[str]) -> str:
    """Difficulty named by the first answer, or beginner."""
    if answers and answers[0]:
        level = answers[0].strip().lower()
        if level in DIFFICULTY_LEVELS:
            return level
    return "beginner"


@dataclass
class WorkflowResult:
    """Outcome of a completed workflow run."""
    steps: List[Dict[str, Any]]
    overall_progress: int
    content: List[ContentItem]
    organized_trail: OrganizedTrail
    learning_path: Optional[Dict[str, Any]] = None
    save_error: Optional[str] = None
    discovered_count: int = 0
    approved_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": self.steps,
            "overallProgress": self.overall_progress,
            "learningPath": self.learning_path,
            "organizedTrail": self.organized_trail.model_dump(),
            "content": [item.model_dump() for item in self.content],
            "discoveredCount": self.discovered_count,
            "approvedCount": self.approved_count,
            "saveError": self.save_error,
        }


class LearningPathWorkflow:
    """
    Single-flight state machine that turns a topic into a learning path.

    Workflow state goes idle -> running -> done; each step goes
    pending -> processing -> completed. overall_progress advances by 25
    per completed step.
    """

    def __init__(
        self,
        discovery: DiscoveryService,
        content_filter: ContentFilterService,
        organizer: ContentOrganizerService,
        topic: str,
        sources: List[str],
        answers: List[str],
        learning_paths: Optional[LearningPathService] = None,
        user_id: Optional[str] = None,
        language: str = "pt-BR",
        profile: Optional[Dict[str, Any]] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Initialize LearningPathWorkflow.

        Args:
            discovery: Content discovery service
            content_filter: AI filter service
            organizer: AI organizer service
            topic: Learning topic
            sources: Requested source tags
            answers: Onboarding answers (first one names the difficulty)
            learning_paths: Persistence service; finalize is a no-op without it
            user_id: Owner of the saved path; finalize is a no-op without it
            language: Language for generated titles and descriptions
            profile: Optional cultural profile used as AI prompt context
            title: Path title (default "Trilha de <topic>")
            description: Path description
            on_progress: Called with a state snapshot after every transition
        """
        self._discovery = discovery
        self._filter = content_filter
        self._organizer = organizer
        self._learning_paths = learning_paths

        self.topic = topic
        self.sources = list(sources)
        self.answers = list(answers)
        self.user_id = user_id
        self.language = language
        self.profile = profile
        self.title = title or f"Trilha de {topic}"
        self.description = description or f"Uma trilha de aprendizado personalizada sobre {topic}."
        self.difficulty = difficulty_from_answers(self.answers)

        self._on_progress = on_progress

        self.state = WorkflowState.IDLE
        self.steps = default_steps()
        self.overall_progress = 0
        self.result: Optional[WorkflowResult] = None

        # Accumulating content list, owned by this workflow
        self._content: List[ContentItem] = []
        self._trail = OrganizedTrail(organizedTrail=[])
        self._discovered_count = 0
        self._approved_count = 0
        self._learning_path: Optional[Dict[str, Any]] = None
        self._save_error: Optional[str] = None

    # ─────────────────────────────────────────────────────────────────
    # State machine
    # ─────────────────────────────────────────────────────────────────

    async def run(self) -> Optional[WorkflowResult]:
        """
        Execute the workflow once.

        Returns:
            The result; on repeated calls, the existing result (None while
            the first run is still in progress)
        """
        if self.state is not WorkflowState.IDLE:
            logger.info(f"Workflow for '{self.topic}' already {self.state.value}, ignoring run()")
            return self.result

        self.state = WorkflowState.RUNNING
        logger.info(f"Workflow started for '{self.topic}' with sources {self.sources}")

        handlers = {
            "search": self._search,
            "filter": self._filter_step,
            "organize": self._organize,
            "finalize": self._finalize,
        }

        for step in self.steps:
            step.status = StepStatus.PROCESSING
            await self._notify()

            await handlers[step.id]()

            step.status = StepStatus.COMPLETED
            self.overall_progress = min(100, self.overall_progress + 100 // len(self.steps))
            logger.info(f"Workflow step '{step.id}' completed ({self.overall_progress}%)")
            await self._notify()

        self.result = WorkflowResult(
            steps=[step.to_dict() for step in self.steps],
            overall_progress=self.overall_progress,
            content=self._content,
            organized_trail=self._trail,
            learning_path=self._learning_path,
            save_error=self._save_error,
            discovered_count=self._discovered_count,
            approved_count=self._approved_count,
        )
        self.state = WorkflowState.DONE
        await self._notify()

        logger.info(f"Workflow done for '{self.topic}': {len(self._content)} items")
        return self.result

    def snapshot(self) -> Dict[str, Any]:
        """Current state, steps and progress."""
        return {
            "state": self.state.value,
            "steps": [step.to_dict() for step in self.steps],
            "overallProgress": self.overall_progress,
        }

    async def _notify(self) -> None:
        if self._on_progress is None:
            return
        outcome = self._on_progress(self.snapshot())
        if outcome is not None:
            await outcome

    # ─────────────────────────────────────────────────────────────────
    # Steps
    # ─────────────────────────────────────────────────────────────────

    async def _search(self) -> None:
        try:
            self._content = await self._discovery.discover(self.topic, self.sources)
        except Exception as e:
            logger.warning(f"Discovery failed for '{self.topic}', continuing with no content: {e}")
            self._content = []
        self._discovered_count = len(self._content)

    async def _filter_step(self) -> None:
        if not self._content:
            logger.warning("No content to filter, skipping")
            return

        self._content = await self._filter.apply(
            self._content, self.topic, self.answers, self.profile
        )
        self._approved_count = sum(1 for item in self._content if item.isApproved)

    async def _organize(self) -> None:
        approved = [item for item in self._content if item.isApproved]
        if not approved:
            logger.warning("No approved content to organize, skipping")
            self._content = []
            return

        self._trail = await self._organizer.organize(
            approved, self.topic, self.answers, self.language, self.profile
        )
        self._content = apply_trail(approved, self._trail)

    async def _finalize(self) -> None:
        if not self._content:
            logger.warning("No content to save, skipping")
            return

        if self._learning_paths is None or not self.user_id:
            logger.info("No user for this workflow, learning path not persisted")
            return

        path = {
            "title": self.title,
            "topic": self.topic,
            "difficulty": self.difficulty,
            "description": self.description,
            "organizedTrail": self._trail,
            "culturalProfileId": (self.profile or {}).get("id"),
        }

        try:
            self._learning_path = await self._learning_paths.create_learning_path(
                self.user_id, path, self._content
            )
        except Exception as e:
            logger.error(f"Failed to save learning path for '{self.topic}': {e}", exc_info=True)
            self._save_error = str(e) or e.__class__.__name__
