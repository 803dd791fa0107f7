"""Dialog forms and their validation rules."""

from agenda_service.forms.validation import (
    CALENDAR_COLORS,
    DEFAULT_CALENDAR_COLOR,
    INVITATION_ROLES,
    PROJECT_LABELS,
    QUICK_CREATE_COLORS,
    TEAM_MEMBERS,
    CalendarDraft,
    CalendarForm,
    Invitation,
    InvitationForm,
    MilestoneInput,
    ProjectForm,
    TaskForm,
    ValidationFailed,
    build_calendar,
    build_project,
    build_quick_calendar,
    build_task,
    color_options,
    validate_invitation,
)

__all__ = [
    "CALENDAR_COLORS",
    "DEFAULT_CALENDAR_COLOR",
    "INVITATION_ROLES",
    "PROJECT_LABELS",
    "QUICK_CREATE_COLORS",
    "TEAM_MEMBERS",
    "CalendarDraft",
    "CalendarForm",
    "Invitation",
    "InvitationForm",
    "MilestoneInput",
    "ProjectForm",
    "TaskForm",
    "ValidationFailed",
    "build_calendar",
    "build_project",
    "build_quick_calendar",
    "build_task",
    "color_options",
    "validate_invitation",
]
