"""Row shapes stored in the hosted backend.

Field names follow the backend tables verbatim (snake_case columns, except
the embedded milestone ``dueDate`` key, which the stored JSON uses).
"""

from pydantic import BaseModel, ConfigDict, Field

from agenda_service.models.base import Priority, ProjectStatus


class Row(BaseModel):
    """Common configuration for backend rows."""

    model_config = ConfigDict(extra="ignore", use_enum_values=True, coerce_numbers_to_str=True)


class UserRow(Row):
    """A row of the ``users`` profile table."""

    id: str
    email: str
    full_name: str = ""
    avatar_url: str | None = None
    language: str = "es"
    tutorial_completed: bool = False
    created_at: str | None = None
    updated_at: str | None = None


class CalendarRow(Row):
    """A row of the ``calendars`` table."""

    id: str
    user_id: str
    name: str
    description: str | None = None
    color: str = "bg-blue-500"
    is_default: bool = False
    created_at: str | None = None
    updated_at: str | None = None


class TaskRow(Row):
    """A row of the ``tasks`` table."""

    id: str
    user_id: str
    calendar_id: str
    title: str
    description: str | None = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: str | None = None
    assignee_name: str | None = None
    assignee_avatar: str | None = None
    project_name: str | None = None
    tags: list[str] | None = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


class MilestoneRow(Row):
    """Milestone as embedded in a project's ``milestones`` JSON column."""

    name: str
    completed: bool = False
    dueDate: str | None = None


class TeamMemberRow(Row):
    """Team member as embedded in a project's ``team_members`` JSON column."""

    name: str
    avatar: str = ""


class ProjectRow(Row):
    """A row of the ``projects`` table."""

    id: str
    user_id: str
    calendar_id: str
    title: str
    description: str | None = None
    progress: int = 0
    due_date: str | None = None
    priority: Priority = Priority.MEDIUM
    status: ProjectStatus = ProjectStatus.IN_PROGRESS
    team_members: list[TeamMemberRow] | None = Field(default_factory=list)
    milestones: list[MilestoneRow] | None = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
