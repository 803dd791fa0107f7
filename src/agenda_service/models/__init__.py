"""Data models for the agenda service."""

from agenda_service.models.base import (
    DEFAULT_CALENDAR_ID,
    DEFAULT_PROJECT_LABEL,
    PLACEHOLDER_AVATAR,
    UNASSIGNED_NAME,
    CalendarMode,
    EventType,
    Priority,
    ProjectStatus,
    ToastKind,
    ViewModel,
    ViewName,
)
from agenda_service.models.domain import (
    CalendarEvent,
    CalendarItem,
    Milestone,
    Person,
    Project,
    SearchResult,
    Task,
    Toast,
)
from agenda_service.models.rows import (
    CalendarRow,
    MilestoneRow,
    ProjectRow,
    TaskRow,
    TeamMemberRow,
    UserRow,
)

__all__ = [
    # Base
    "ViewModel",
    "Priority",
    "ProjectStatus",
    "EventType",
    "ViewName",
    "CalendarMode",
    "ToastKind",
    "DEFAULT_CALENDAR_ID",
    "DEFAULT_PROJECT_LABEL",
    "PLACEHOLDER_AVATAR",
    "UNASSIGNED_NAME",
    # View models
    "Person",
    "CalendarItem",
    "Task",
    "Milestone",
    "Project",
    "CalendarEvent",
    "SearchResult",
    "Toast",
    # Backend rows
    "UserRow",
    "CalendarRow",
    "TaskRow",
    "ProjectRow",
    "MilestoneRow",
    "TeamMemberRow",
]
