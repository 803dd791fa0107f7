"""Dialog form validation.

Each ``build_*`` function validates a submitted form and returns the draft
object the controller persists. Failures never reach the backend: they
raise ``ValidationFailed`` carrying localized per-field messages.
"""

import random
import re

from pydantic import BaseModel, Field

from agenda_service.i18n import Translator
from agenda_service.models.base import (
    DEFAULT_PROJECT_LABEL,
    PLACEHOLDER_AVATAR,
    UNASSIGNED_NAME,
    Priority,
    ProjectStatus,
    today_iso,
)
from agenda_service.models.domain import Milestone, Person, Project, Task

# (class, translation key under "colors")
CALENDAR_COLORS: list[tuple[str, str]] = [
    ("bg-blue-500", "blue"),
    ("bg-green-500", "green"),
    ("bg-purple-500", "purple"),
    ("bg-orange-500", "orange"),
    ("bg-red-500", "red"),
    ("bg-pink-500", "pink"),
    ("bg-indigo-500", "indigo"),
    ("bg-yellow-500", "yellow"),
]
DEFAULT_CALENDAR_COLOR = "bg-blue-500"
QUICK_CREATE_COLORS = [value for value, _ in CALENDAR_COLORS[:5]]
CALENDAR_NAME_MIN_LENGTH = 2

TEAM_MEMBERS: dict[str, str] = {
    "ana": "Ana García",
    "carlos": "Carlos López",
    "maria": "María Rodríguez",
    "elena": "Elena Ruiz",
    "david": "David Martín",
}

PROJECT_LABELS: dict[str, str] = {
    "redesign": "Rediseño web",
    "api": "API v2",
    "marketing": "Marketing",
    "docs": "Documentación",
}

INVITATION_ROLES = ("viewer", "editor", "admin")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ValidationFailed(Exception):
    """A form did not validate. ``errors`` maps field names to messages."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(", ".join(f"{field}: {message}" for field, message in errors.items()))
        self.errors = errors


class CalendarForm(BaseModel):
    name: str = ""
    description: str = ""
    color: str = DEFAULT_CALENDAR_COLOR


class CalendarDraft(BaseModel):
    name: str
    description: str = ""
    color: str = DEFAULT_CALENDAR_COLOR


class TaskForm(BaseModel):
    title: str = ""
    description: str = ""
    priority: str = ""
    project: str = Field(default="", description="Project id from the dialog's select")
    assignee: str = Field(default="", description="Team member id")
    due_date: str | None = None


class MilestoneInput(BaseModel):
    name: str = ""
    due_date: str | None = None


class ProjectForm(BaseModel):
    title: str = ""
    description: str = ""
    priority: str = ""
    due_date: str | None = None
    milestones: list[MilestoneInput] = Field(default_factory=list)
    team: list[str] = Field(default_factory=list, description="Team member ids")


class InvitationForm(BaseModel):
    emails: list[str] = Field(default_factory=list)
    role: str = ""
    calendars: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    message: str = ""


class Invitation(BaseModel):
    emails: list[str]
    role: str
    calendars: list[str]
    projects: list[str]
    message: str = ""


def color_options(translator: Translator) -> list[dict[str, str]]:
    """Palette entries with localized names."""
    return [{"value": value, "name": translator.t(f"colors.{key}")} for value, key in CALENDAR_COLORS]


def build_calendar(form: CalendarForm, translator: Translator) -> CalendarDraft:
    errors: dict[str, str] = {}
    name = form.name.strip()
    if not name:
        errors["name"] = translator.t("calendarNameRequired")
    elif len(name) < CALENDAR_NAME_MIN_LENGTH:
        errors["name"] = translator.t("nameMinLength")
    if form.color not in {value for value, _ in CALENDAR_COLORS}:
        errors["color"] = translator.t("selectColor")
    if errors:
        raise ValidationFailed(errors)
    return CalendarDraft(name=name, description=form.description.strip(), color=form.color)


def build_quick_calendar(
    name: str,
    translator: Translator,
    rng: random.Random | None = None,
) -> CalendarDraft:
    """Sidebar quick-create: name only, colour picked at random."""
    name = name.strip()
    if not name:
        raise ValidationFailed({"name": translator.t("calendarNameRequired")})
    color = (rng or random).choice(QUICK_CREATE_COLORS)
    return CalendarDraft(name=name, description="", color=color)


def _check_title_and_priority(title: str, priority: str, translator: Translator) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not title.strip():
        errors["title"] = translator.t("titleRequired")
    if priority not in {p.value for p in Priority}:
        errors["priority"] = translator.t("priorityRequired")
    return errors


def build_task(form: TaskForm, translator: Translator, calendar_id: str) -> Task:
    """Validate the task dialog and map ids to display labels."""
    errors = _check_title_and_priority(form.title, form.priority, translator)
    if errors:
        raise ValidationFailed(errors)

    return Task(
        id="",
        title=form.title,
        description=form.description,
        completed=False,
        priority=form.priority,
        due_date=form.due_date or today_iso(),
        assignee=Person(name=TEAM_MEMBERS.get(form.assignee, UNASSIGNED_NAME), avatar=PLACEHOLDER_AVATAR),
        project=PROJECT_LABELS.get(form.project, DEFAULT_PROJECT_LABEL),
        tags=[tag for tag in (form.priority, form.project) if tag],
        calendar=calendar_id,
    )


def build_project(
    form: ProjectForm,
    translator: Translator,
    calendar_id: str,
    editing: Project | None = None,
) -> Project:
    """Validate the project dialog.

    Milestones with blank names are dropped. When editing, milestone
    completion is carried over by index and progress and status are
    recomputed from the resulting milestones.
    """
    # agenda_service.core imports this package at load time
    from agenda_service.core.progress import with_recomputed_progress

    errors = _check_title_and_priority(form.title, form.priority, translator)
    if errors:
        raise ValidationFailed(errors)

    named = [m for m in form.milestones if m.name.strip()]
    milestones: list[Milestone] = []
    for index, milestone in enumerate(named):
        completed = False
        if editing is not None and index < len(editing.milestones):
            completed = editing.milestones[index].completed
        milestones.append(
            Milestone(name=milestone.name.strip(), completed=completed, due_date=milestone.due_date or None)
        )

    team = [
        Person(name=TEAM_MEMBERS.get(member_id, UNASSIGNED_NAME), avatar=PLACEHOLDER_AVATAR)
        for member_id in form.team
    ]

    project = Project(
        id=editing.id if editing else "",
        title=form.title.strip(),
        description=form.description.strip(),
        progress=0,
        due_date=form.due_date or today_iso(),
        priority=form.priority,
        status=ProjectStatus.IN_PROGRESS,
        team=team,
        milestones=milestones,
        calendar=editing.calendar if editing and editing.calendar else calendar_id,
    )
    return with_recomputed_progress(project) if editing is not None else project


def validate_invitation(form: InvitationForm, translator: Translator) -> Invitation:
    errors: dict[str, str] = {}
    emails = [email.strip() for email in form.emails if email.strip()]
    if not emails:
        errors["emails"] = translator.t("emailRequired")
    else:
        invalid = [email for email in emails if not EMAIL_PATTERN.match(email)]
        if invalid:
            errors["emails"] = translator.t("invalidEmails", {"emails": ", ".join(invalid)})
    if form.role not in INVITATION_ROLES:
        errors["role"] = translator.t("roleRequired")
    if not form.calendars and not form.projects:
        errors["access"] = translator.t("accessRequired")
    if errors:
        raise ValidationFailed(errors)
    return Invitation(
        emails=emails,
        role=form.role,
        calendars=list(form.calendars),
        projects=list(form.projects),
        message=form.message,
    )
