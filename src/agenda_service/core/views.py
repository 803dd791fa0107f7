"""Presentation helpers for the task list, project list, sidebar and header."""

import random
from datetime import date, datetime, timedelta, timezone
from typing import Any, Literal, Sequence

from agenda_service.forms import QUICK_CREATE_COLORS
from agenda_service.i18n import Translator
from agenda_service.models.base import ViewName
from agenda_service.models.domain import CalendarItem, Project, Task

TaskFilter = Literal["all", "pending", "completed"]

COMPLETION_REMOVAL_DELAY = timedelta(seconds=2)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TasksView:
    """Local task list with a status filter and delayed removal of completed tasks.

    Checking a pending task marks it completed and schedules it to leave the
    list two seconds later; unchecking it before then cancels the removal.
    """

    def __init__(self, tasks: Sequence[Task] = ()) -> None:
        self.filter: TaskFilter = "all"
        self._tasks: list[Task] = list(tasks)
        self._completing: dict[str, datetime] = {}

    def sync(self, tasks: Sequence[Task]) -> None:
        """Replace the local list with the controller's tasks for this calendar."""
        self._tasks = list(tasks)
        present = {task.id for task in self._tasks}
        self._completing = {tid: due for tid, due in self._completing.items() if tid in present}

    def set_filter(self, value: TaskFilter) -> None:
        if value not in ("all", "pending", "completed"):
            raise ValueError(f"Unknown task filter: {value}")
        self.filter = value

    def toggle(self, task_id: str, now: datetime | None = None) -> Task | None:
        """Flip a task's completion in the local list.

        Returns:
            The updated task, or None if it is not in the list
        """
        now = now or _now()
        self._flush(now)
        for position, task in enumerate(self._tasks):
            if task.id != task_id:
                continue
            updated = task.model_copy(update={"completed": not task.completed})
            self._tasks[position] = updated
            if updated.completed:
                self._completing[task_id] = now + COMPLETION_REMOVAL_DELAY
            else:
                self._completing.pop(task_id, None)
            return updated
        return None

    def is_completing(self, task_id: str) -> bool:
        return task_id in self._completing

    def _flush(self, now: datetime) -> None:
        expired = {tid for tid, due in self._completing.items() if due <= now}
        if expired:
            self._tasks = [task for task in self._tasks if task.id not in expired]
            for tid in expired:
                del self._completing[tid]

    def tasks(self, now: datetime | None = None) -> list[Task]:
        """All tasks still in the local list."""
        self._flush(now or _now())
        return list(self._tasks)

    def visible(self, now: datetime | None = None) -> list[Task]:
        """Tasks passing the current filter."""
        tasks = self.tasks(now)
        if self.filter == "pending":
            return [task for task in tasks if not task.completed]
        if self.filter == "completed":
            return [task for task in tasks if task.completed]
        return tasks

    def counts(self, now: datetime | None = None) -> dict[str, int]:
        return {"total": len(self.tasks(now)), "shown": len(self.visible(now))}

    @staticmethod
    def is_overdue(task: Task, today: date) -> bool:
        """A pending task whose due date lies before today."""
        if task.completed:
            return False
        try:
            return date.fromisoformat(task.due_date) < today
        except ValueError:
            return False


class ProjectsView:
    """Localized labels and milestone tallies for the project cards."""

    def __init__(self, translator: Translator) -> None:
        self._translator = translator

    def priority_label(self, priority: str) -> str:
        return self._translator.t(f"priorities.{priority}")

    def status_label(self, status: str) -> str:
        return self._translator.t(f"statuses.{status}")

    @staticmethod
    def milestone_counts(project: Project) -> tuple[int, int]:
        """(completed, total) milestones."""
        done = sum(1 for milestone in project.milestones if milestone.completed)
        return done, len(project.milestones)

    def cards(self, projects: Sequence[Project]) -> list[dict[str, Any]]:
        cards = []
        for project in projects:
            done, total = self.milestone_counts(project)
            cards.append(
                {
                    **project.model_dump(),
                    "priority_label": self.priority_label(project.priority),
                    "status_label": self.status_label(project.status),
                    "milestones_completed": done,
                    "milestones_total": total,
                }
            )
        return cards


class Sidebar:
    """Navigation menu and calendar list."""

    def __init__(self, translator: Translator) -> None:
        self._translator = translator

    def menu_items(self, current_view: str) -> list[dict[str, Any]]:
        return [
            {"id": view.value, "label": self._translator.t(view.value), "active": view.value == current_view}
            for view in ViewName
        ]

    @staticmethod
    def calendar_entries(calendars: Sequence[CalendarItem], selected: str) -> list[dict[str, Any]]:
        return [{**calendar.model_dump(), "selected": calendar.id == selected} for calendar in calendars]

    def calendars_heading(self, calendars: Sequence[CalendarItem]) -> str:
        return f"{self._translator.t('calendars')} ({len(calendars)})"

    @staticmethod
    def random_color(rng: random.Random | None = None) -> str:
        return (rng or random).choice(QUICK_CREATE_COLORS)


class Header:
    """Title and new-button label for the current view."""

    def __init__(self, translator: Translator) -> None:
        self._translator = translator

    def title(self, current_view: str) -> str:
        return self._translator.t(current_view)

    def new_button_label(self, current_view: str) -> str:
        if current_view == ViewName.PROJECTS.value:
            return self._translator.t("newProject")
        if current_view in (ViewName.CALENDAR.value, ViewName.TASKS.value):
            return self._translator.t("newTask")
        return self._translator.t("create")
