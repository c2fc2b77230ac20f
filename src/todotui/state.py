from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

from .channel import EventChannel
from .logger import get_logger

logger = get_logger(__name__)


class AppState(str, Enum):
    INIT = "init"
    READY = "ready"
    RUNNING = "run"
    LOADING_DATA = "loading"
    STOPPED = "stop"


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    color: Optional[str] = None
    order: int = 0
    parent_id: Optional[str] = None
    is_archived: bool = False


@dataclass(frozen=True)
class Task:
    id: str
    content: str
    project_id: str
    checked: bool = False
    priority: int = 1
    order: int = 0


@dataclass
class ApplicationState:
    """
    The mutable root of the UI.
    Owned by the run loop; the producer thread and signal handlers never touch it.
    """
    phase: AppState = AppState.INIT
    projects: Tuple[Project, ...] = ()
    cursor: int = 0
    error_message: Optional[str] = None
    events: EventChannel = field(default_factory=EventChannel)

    @property
    def stopped(self) -> bool:
        return self.phase is AppState.STOPPED

    def set_phase(self, phase: AppState):
        if self.stopped or phase is self.phase:
            return
        logger.debug("phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def stop(self, message: Optional[str] = None):
        # first recorded error wins; STOPPED is terminal
        if message and self.error_message is None:
            self.error_message = message
            logger.error("stopping: %s", message)
        self.set_phase(AppState.STOPPED)

    def load_projects(self, projects: Sequence[Project]):
        self.projects = tuple(projects)
        self.cursor = 0

    def selected_project(self) -> Optional[Project]:
        if not self.projects:
            return None
        return self.projects[self.cursor]
