"""View models held by the controller and consumed by the views."""

from datetime import datetime, timezone

from pydantic import Field

from agenda_service.models.base import (
    DEFAULT_PROJECT_LABEL,
    PLACEHOLDER_AVATAR,
    UNASSIGNED_NAME,
    EventType,
    Priority,
    ProjectStatus,
    ToastKind,
    ViewModel,
    today_iso,
)
from agenda_service.models.rows import CalendarRow, ProjectRow, TaskRow


class Person(ViewModel):
    """Name and avatar pair used for assignees and team members.

    Not a reference to a registered user.
    """

    name: str = UNASSIGNED_NAME
    avatar: str = PLACEHOLDER_AVATAR


class CalendarItem(ViewModel):
    """A calendar as listed in the sidebar."""

    id: str
    name: str
    color: str = "bg-blue-500"
    description: str = ""
    is_default: bool = False
    tasks: int = Field(default=0, ge=0, description="Number of tasks in this calendar")

    @classmethod
    def from_row(cls, row: CalendarRow) -> "CalendarItem":
        return cls(
            id=row.id,
            name=row.name,
            color=row.color,
            description=row.description or "",
            is_default=row.is_default,
        )


class Task(ViewModel):
    """A task in one calendar."""

    id: str
    title: str
    description: str = ""
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: str = Field(default_factory=today_iso)
    assignee: Person = Field(default_factory=Person)
    project: str = Field(default=DEFAULT_PROJECT_LABEL, description="Free-text project label")
    tags: list[str] = Field(default_factory=list)
    calendar: str = ""

    @classmethod
    def from_row(cls, row: TaskRow) -> "Task":
        return cls(
            id=row.id,
            title=row.title,
            description=row.description or "",
            completed=row.completed,
            priority=row.priority,
            due_date=row.due_date or today_iso(),
            assignee=Person(
                name=row.assignee_name or UNASSIGNED_NAME,
                avatar=row.assignee_avatar or PLACEHOLDER_AVATAR,
            ),
            project=row.project_name or DEFAULT_PROJECT_LABEL,
            tags=row.tags or [],
            calendar=row.calendar_id,
        )

    def to_row_values(self) -> dict:
        """Column values written on insert/update."""
        return {
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "due_date": self.due_date,
            "assignee_name": self.assignee.name,
            "assignee_avatar": self.assignee.avatar,
            "project_name": self.project,
            "tags": list(self.tags),
        }


class Milestone(ViewModel):
    """A milestone embedded in a project, identified by its index."""

    name: str
    completed: bool = False
    due_date: str | None = None

    def to_json(self) -> dict:
        data: dict = {"name": self.name, "completed": self.completed}
        if self.due_date:
            data["dueDate"] = self.due_date
        return data


class Project(ViewModel):
    """A project with milestones and a team."""

    id: str
    title: str
    description: str = ""
    progress: int = Field(default=0, ge=0, le=100)
    due_date: str = Field(default_factory=today_iso)
    priority: Priority = Priority.MEDIUM
    status: ProjectStatus = ProjectStatus.IN_PROGRESS
    team: list[Person] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    calendar: str = ""

    @classmethod
    def from_row(cls, row: ProjectRow) -> "Project":
        return cls(
            id=row.id,
            title=row.title,
            description=row.description or "",
            progress=row.progress,
            due_date=row.due_date or today_iso(),
            priority=row.priority,
            status=row.status,
            team=[Person(name=m.name, avatar=m.avatar or PLACEHOLDER_AVATAR) for m in row.team_members or []],
            milestones=[
                Milestone(name=m.name, completed=m.completed, due_date=m.dueDate)
                for m in row.milestones or []
            ],
            calendar=row.calendar_id,
        )

    def to_row_values(self) -> dict:
        """Column values written on insert/update."""
        return {
            "title": self.title,
            "description": self.description,
            "progress": self.progress,
            "due_date": self.due_date,
            "priority": self.priority,
            "status": self.status,
            "team_members": [member.model_dump() for member in self.team],
            "milestones": [milestone.to_json() for milestone in self.milestones],
        }


class CalendarEvent(ViewModel):
    """Event synthesized from a task, a project or a milestone due date."""

    id: str
    title: str
    date: str
    type: EventType
    priority: Priority | None = None
    completed: bool = False
    project_title: str | None = None


class SearchResult(ViewModel):
    """A single search hit."""

    type: EventType
    id: str
    title: str
    description: str | None = None
    priority: Priority | None = None
    due_date: str | None = None
    completed: bool | None = None
    project_title: str | None = None
    assignee: Person | None = None
    team: list[Person] | None = None
    progress: int | None = None


class Toast(ViewModel):
    """A transient notification."""

    id: str
    message: str
    kind: ToastKind = ToastKind.SUCCESS
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration: float = 3.0

    def expired(self, now: datetime) -> bool:
        return (now - self.created_at).total_seconds() >= self.duration
