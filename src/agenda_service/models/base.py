"""Base model and common enumerations."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict

PLACEHOLDER_AVATAR = "/placeholder.svg?height=32&width=32"
UNASSIGNED_NAME = "Sin asignar"
DEFAULT_PROJECT_LABEL = "General"
DEFAULT_CALENDAR_ID = "general"


class Priority(str, Enum):
    """Task and project priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ProjectStatus(str, Enum):
    """Project status, derived from milestone progress."""

    IN_PROGRESS = "in-progress"
    NEAR_COMPLETION = "near-completion"
    COMPLETED = "completed"


class EventType(str, Enum):
    """Calendar event source discriminator."""

    TASK = "task"
    PROJECT = "project"
    MILESTONE = "milestone"


class ViewName(str, Enum):
    """Top-level views of the application."""

    CALENDAR = "calendar"
    PROJECTS = "projects"
    TASKS = "tasks"


class CalendarMode(str, Enum):
    """Calendar grid granularity."""

    MONTH = "month"
    WEEK = "week"
    DAY = "day"


class ToastKind(str, Enum):
    """Toast notification flavour."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class ViewModel(BaseModel):
    """Base class for in-memory view models.

    View models are what the controller keeps in state and what the
    presentation helpers consume. They are never written to the backend
    directly; see ``agenda_service.models.rows`` for the stored shapes.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=True,
        populate_by_name=True,
    )


def today_iso() -> str:
    """Today's date as a YYYY-MM-DD string."""
    return date.today().isoformat()
