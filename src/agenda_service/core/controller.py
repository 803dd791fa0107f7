"""Top-level application controller.

``AgendaApp`` owns the signed-in user's calendars, tasks and projects. It
loads them from the backend once per user, applies mutations through the
backend and merges the echoed results back into local state, and reports
outcomes through toasts.
"""

from datetime import date
from typing import Any, Literal

from agenda_service.backend import BackendClient, BackendError
from agenda_service.core.events import (
    DEFAULT_UPCOMING_LIMIT,
    build_calendar_events,
    navigate,
    upcoming_events,
)
from agenda_service.core.progress import toggle_milestone as toggle_project_milestone
from agenda_service.core.search import LIVE_SEARCH_MIN_LENGTH, SearchBox
from agenda_service.core.session import AuthSession
from agenda_service.core.toasts import ToastCenter
from agenda_service.core.tutorial import Tutorial
from agenda_service.core.views import Header, ProjectsView, Sidebar, TasksView
from agenda_service.forms import CalendarDraft
from agenda_service.i18n import Translator
from agenda_service.models.base import (
    DEFAULT_CALENDAR_ID,
    CalendarMode,
    ProjectStatus,
    ToastKind,
    ViewName,
)
from agenda_service.models.domain import CalendarEvent, CalendarItem, Milestone, Project, Task
from agenda_service.models.rows import CalendarRow, ProjectRow, TaskRow, UserRow
from agenda_service.utils.logging import get_logger
from agenda_service.utils.metrics import get_metrics

logger = get_logger(__name__)
metrics = get_metrics()

Dialog = Literal["task", "project"]

COPY_SUFFIX = " (Copia)"


class AgendaApp:
    """Application state and user actions.

    Provides:
    - Data loading for the signed-in user
    - Create/update/delete for calendars, tasks and projects
    - Project duplication and milestone toggling
    - Per-calendar views, calendar navigation and search
    """

    def __init__(
        self,
        backend: BackendClient,
        session: AuthSession,
        translator: Translator,
        toasts: ToastCenter,
        upcoming_limit: int = DEFAULT_UPCOMING_LIMIT,
        live_search_min_length: int = LIVE_SEARCH_MIN_LENGTH,
    ) -> None:
        """Initialize the controller.

        Args:
            backend: Backend client
            session: Auth session holder
            translator: Translator for toast messages and labels
            toasts: Toast queue
            upcoming_limit: Number of events in the upcoming panel
            live_search_min_length: Query length that triggers live search
        """
        self.backend = backend
        self.session = session
        self.translator = translator
        self.toasts = toasts
        self.upcoming_limit = upcoming_limit

        self.current_view: str = ViewName.CALENDAR.value
        self.selected_calendar: str = DEFAULT_CALENDAR_ID
        self.calendars: list[CalendarItem] = []
        self.tasks: list[Task] = []
        self.projects: list[Project] = []
        self.editing_project: Project | None = None
        self.open_dialog: Dialog | None = None
        self.show_tutorial = False

        self.calendar_mode: str = CalendarMode.MONTH.value
        self.calendar_anchor: date = date.today()

        self.tasks_view = TasksView()
        self.projects_view = ProjectsView(translator)
        self.sidebar = Sidebar(translator)
        self.header = Header(translator)
        self.search_box = SearchBox(live_search_min_length)
        self.tutorial = Tutorial(session, translator)

        self._loaded_user_id: str | None = None

    @property
    def user(self) -> UserRow | None:
        return self.session.user

    # Loading

    async def handle_user_change(self, previous: UserRow | None, current: UserRow | None) -> None:
        """React to sign-in, sign-out and profile updates."""
        if current is None:
            self.reset()
            return

        self.show_tutorial = not current.tutorial_completed
        if self.show_tutorial and not self.tutorial.visible:
            self.tutorial.show()
        elif not self.show_tutorial:
            self.tutorial.visible = False

        if current.id != self._loaded_user_id:
            await self.load_user_data()

    def reset(self) -> None:
        """Drop everything held for the previous user."""
        self.current_view = ViewName.CALENDAR.value
        self.selected_calendar = DEFAULT_CALENDAR_ID
        self.calendars = []
        self.tasks = []
        self.projects = []
        self.editing_project = None
        self.open_dialog = None
        self.show_tutorial = False
        self.tutorial.visible = False
        self.search_box.clear()
        self.tasks_view.sync([])
        self._loaded_user_id = None

    async def load_user_data(self) -> bool:
        """Load calendars, tasks and projects of the signed-in user.

        Returns:
            True if state was replaced, False if nobody is signed in or a
            query failed (state is then left as it was)
        """
        user = self.user
        if user is None:
            return False

        try:
            calendar_rows = await (
                self.backend.table("calendars").select("*").eq("user_id", user.id).order("created_at").execute()
            )
            task_rows = await (
                self.backend.table("tasks")
                .select("*")
                .eq("user_id", user.id)
                .order("created_at", ascending=False)
                .execute()
            )
            project_rows = await (
                self.backend.table("projects")
                .select("*")
                .eq("user_id", user.id)
                .order("created_at", ascending=False)
                .execute()
            )
        except BackendError as e:
            logger.error("user_data_load_failed", user_id=user.id, error=e.message, status=e.status)
            return False

        calendars = [CalendarRow.model_validate(row) for row in calendar_rows]
        self.calendars = [CalendarItem.from_row(row) for row in calendars]
        self.tasks = [Task.from_row(TaskRow.model_validate(row)) for row in task_rows]
        self.projects = [Project.from_row(ProjectRow.model_validate(row)) for row in project_rows]

        default = next((row for row in calendars if row.is_default), None)
        if default is not None:
            self.selected_calendar = default.id

        self._loaded_user_id = user.id
        self._tasks_changed()
        logger.info(
            "user_data_loaded",
            user_id=user.id,
            calendars=len(self.calendars),
            tasks=len(self.tasks),
            projects=len(self.projects),
        )
        return True

    # Helpers

    def _t(self, key: str, **params: Any) -> str:
        return self.translator.t(key, params or None)

    def _succeeded(self, operation: str, entity: str, message: str) -> None:
        metrics.record_operation(operation, entity, "success")
        self.toasts.show(message, ToastKind.SUCCESS)

    def _failed(self, operation: str, entity: str, error: BackendError, message_key: str, **context: Any) -> None:
        metrics.record_operation(operation, entity, "error")
        logger.error(
            f"{entity}_{operation}_failed",
            error=error.message,
            status=error.status,
            code=error.code,
            **context,
        )
        self.toasts.show(self._t(message_key), ToastKind.ERROR)

    def sync_counters(self) -> None:
        """Recompute each calendar's task counter."""
        counts: dict[str, int] = {}
        for task in self.tasks:
            counts[task.calendar] = counts.get(task.calendar, 0) + 1
        self.calendars = [
            calendar.model_copy(update={"tasks": counts.get(calendar.id, 0)}) for calendar in self.calendars
        ]

    def _tasks_changed(self) -> None:
        self.sync_counters()
        self.tasks_view.sync(self.calendar_tasks())

    def find_task(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks if task.id == task_id), None)

    def find_project(self, project_id: str) -> Project | None:
        return next((project for project in self.projects if project.id == project_id), None)

    def find_calendar(self, calendar_id: str) -> CalendarItem | None:
        return next((calendar for calendar in self.calendars if calendar.id == calendar_id), None)

    # View & selection

    def set_view(self, view: ViewName | str) -> None:
        self.current_view = ViewName(view).value

    def select_calendar(self, calendar_id: str) -> None:
        self.selected_calendar = calendar_id
        self.tasks_view.sync(self.calendar_tasks())

    def calendar_tasks(self) -> list[Task]:
        return [task for task in self.tasks if task.calendar == self.selected_calendar]

    def calendar_projects(self) -> list[Project]:
        return [project for project in self.projects if project.calendar == self.selected_calendar]

    def calendar_events(self) -> list[CalendarEvent]:
        return build_calendar_events(self.calendar_tasks(), self.calendar_projects())

    def upcoming(self, today: date | None = None) -> list[CalendarEvent]:
        return upcoming_events(self.calendar_events(), today or date.today(), self.upcoming_limit)

    def set_calendar_mode(self, mode: CalendarMode | str) -> None:
        self.calendar_mode = CalendarMode(mode).value

    def navigate_calendar(self, direction: Literal["prev", "next"]) -> date:
        self.calendar_anchor = navigate(self.calendar_anchor, self.calendar_mode, direction)
        return self.calendar_anchor

    def go_to_today(self) -> date:
        self.calendar_anchor = date.today()
        return self.calendar_anchor

    def new_click(self) -> Dialog:
        """The header's new button: project dialog on the projects view, task dialog elsewhere."""
        if self.current_view == ViewName.PROJECTS.value:
            self.editing_project = None
            self.open_dialog = "project"
        else:
            self.open_dialog = "task"
        return self.open_dialog

    def edit_project(self, project: Project) -> None:
        self.editing_project = project
        self.open_dialog = "project"

    def close_dialog(self) -> None:
        self.open_dialog = None

    def search(self, term: str, trigger: Literal["live", "enter", "click"] = "enter") -> list:
        if trigger == "live":
            return self.search_box.change(term, self.tasks, self.projects)
        self.search_box.term = term
        if trigger == "click":
            return self.search_box.click(self.tasks, self.projects)
        return self.search_box.submit(self.tasks, self.projects)

    # Calendars

    async def create_calendar(self, draft: CalendarDraft) -> CalendarItem | None:
        """Create a calendar and select it."""
        user = self.user
        if user is None:
            return None

        try:
            row = await (
                self.backend.table("calendars")
                .insert(
                    {
                        "user_id": user.id,
                        "name": draft.name,
                        "description": draft.description,
                        "color": draft.color,
                    }
                )
                .select()
                .single()
                .execute()
            )
        except BackendError as e:
            self._failed("create", "calendar", e, "errors.calendarCreate", name=draft.name)
            return None

        calendar = CalendarItem(
            id=str(row["id"]),
            name=row.get("name", draft.name),
            color=row.get("color", draft.color),
            description=draft.description,
            is_default=bool(row.get("is_default", False)),
            tasks=0,
        )
        self.calendars = [*self.calendars, calendar]
        self.select_calendar(calendar.id)
        self.sync_counters()
        self._succeeded("create", "calendar", self._t("success.calendarCreated", name=draft.name))
        logger.info("calendar_created", calendar_id=calendar.id)
        return calendar

    async def update_calendar(self, calendar_id: str, draft: CalendarDraft) -> CalendarItem | None:
        if self.user is None:
            return None
        existing = self.find_calendar(calendar_id)
        if existing is None:
            return None

        values = {"name": draft.name, "description": draft.description, "color": draft.color}
        try:
            await self.backend.table("calendars").update(values).eq("id", calendar_id).execute()
        except BackendError as e:
            self._failed("update", "calendar", e, "errors.calendarUpdate", calendar_id=calendar_id)
            return None

        updated = existing.model_copy(update=values)
        self.calendars = [updated if c.id == calendar_id else c for c in self.calendars]
        self._succeeded("update", "calendar", self._t("success.calendarUpdated", name=draft.name))
        return updated

    async def delete_calendar(self, calendar_id: str) -> bool:
        """Delete a calendar along with its tasks and projects.

        If it was selected, selection moves to the default calendar, else the
        first remaining one, else the built-in general calendar id.
        """
        if self.user is None:
            return False
        existing = self.find_calendar(calendar_id)
        if existing is None:
            return False

        try:
            await self.backend.table("calendars").delete().eq("id", calendar_id).execute()
        except BackendError as e:
            self._failed("delete", "calendar", e, "errors.calendarDelete", calendar_id=calendar_id)
            return False

        self.calendars = [c for c in self.calendars if c.id != calendar_id]
        self.tasks = [t for t in self.tasks if t.calendar != calendar_id]
        self.projects = [p for p in self.projects if p.calendar != calendar_id]
        if self.selected_calendar == calendar_id:
            fallback = next((c for c in self.calendars if c.is_default), None)
            if fallback is None and self.calendars:
                fallback = self.calendars[0]
            self.selected_calendar = fallback.id if fallback else DEFAULT_CALENDAR_ID
        self._tasks_changed()
        self._succeeded("delete", "calendar", self._t("success.calendarDeleted", name=existing.name))
        return True

    # Tasks

    async def create_task(self, task: Task) -> Task | None:
        """Persist a new task in the selected calendar."""
        user = self.user
        if user is None:
            return None

        try:
            row = await (
                self.backend.table("tasks")
                .insert({"user_id": user.id, "calendar_id": self.selected_calendar, **task.to_row_values()})
                .select()
                .single()
                .execute()
            )
        except BackendError as e:
            self._failed("create", "task", e, "errors.taskCreate", title=task.title)
            return None

        created = task.model_copy(update={"id": str(row["id"]), "calendar": self.selected_calendar})
        self.tasks = [*self.tasks, created]
        self._tasks_changed()
        self._succeeded("create", "task", self._t("success.taskCreated", name=task.title))
        return created

    async def update_task(self, task: Task, notify: bool = True) -> Task | None:
        if self.user is None:
            return None
        if self.find_task(task.id) is None:
            return None

        try:
            await self.backend.table("tasks").update(task.to_row_values()).eq("id", task.id).execute()
        except BackendError as e:
            self._failed("update", "task", e, "errors.taskUpdate", task_id=task.id)
            return None

        self.tasks = [task if t.id == task.id else t for t in self.tasks]
        self._tasks_changed()
        if notify:
            self._succeeded("update", "task", self._t("success.taskUpdated", name=task.title))
        else:
            metrics.record_operation("update", "task", "success")
        return task

    async def toggle_task(self, task_id: str) -> Task | None:
        """Tick or untick a task in the task list and persist its completion."""
        current = self.find_task(task_id)
        if self.user is None or current is None:
            return None

        toggled = self.tasks_view.toggle(task_id)
        if toggled is None:
            toggled = current.model_copy(update={"completed": not current.completed})
        result = await self.update_task(toggled, notify=False)
        if result is None:
            # Persisting failed: undo the local tick.
            self.tasks_view.toggle(task_id)
        return result

    async def delete_task(self, task_id: str) -> bool:
        if self.user is None:
            return False
        task = self.find_task(task_id)
        if task is None:
            return False

        try:
            await self.backend.table("tasks").delete().eq("id", task_id).execute()
        except BackendError as e:
            self._failed("delete", "task", e, "errors.taskDelete", task_id=task_id)
            return False

        self.tasks = [t for t in self.tasks if t.id != task_id]
        self._tasks_changed()
        self._succeeded("delete", "task", self._t("success.taskDeleted", name=task.title))
        return True

    # Projects

    async def create_project(self, project: Project, success_key: str = "success.projectCreated") -> Project | None:
        """Persist a new project in the selected calendar."""
        user = self.user
        if user is None:
            return None

        try:
            row = await (
                self.backend.table("projects")
                .insert({"user_id": user.id, "calendar_id": self.selected_calendar, **project.to_row_values()})
                .select()
                .single()
                .execute()
            )
        except BackendError as e:
            self._failed("create", "project", e, "errors.projectCreate", title=project.title)
            return None

        created = project.model_copy(update={"id": str(row["id"]), "calendar": self.selected_calendar})
        self.projects = [*self.projects, created]
        self._succeeded("create", "project", self._t(success_key, name=project.title))
        return created

    async def update_project(self, project: Project) -> Project | None:
        if self.user is None:
            return None
        if self.find_project(project.id) is None:
            return None

        try:
            await self.backend.table("projects").update(project.to_row_values()).eq("id", project.id).execute()
        except BackendError as e:
            self._failed("update", "project", e, "errors.projectUpdate", project_id=project.id)
            return None

        self.projects = [project if p.id == project.id else p for p in self.projects]
        self.editing_project = None
        self._succeeded("update", "project", self._t("success.projectUpdated", name=project.title))
        return project

    async def duplicate_project(self, project: Project) -> Project | None:
        """Create a fresh copy: new title, no progress, every milestone open."""
        copy = project.model_copy(
            update={
                "id": "",
                "title": f"{project.title}{COPY_SUFFIX}",
                "progress": 0,
                "status": ProjectStatus.IN_PROGRESS.value,
                "milestones": [
                    Milestone(name=m.name, completed=False, due_date=m.due_date) for m in project.milestones
                ],
                "team": [member.model_copy() for member in project.team],
            }
        )
        return await self.create_project(copy, success_key="success.projectDuplicated")

    async def delete_project(self, project_id: str) -> bool:
        """Delete one project. Unknown ids are ignored; tasks are untouched."""
        if self.user is None:
            return False
        project = self.find_project(project_id)
        if project is None:
            return False

        try:
            await self.backend.table("projects").delete().eq("id", project_id).execute()
        except BackendError as e:
            self._failed("delete", "project", e, "errors.projectDelete", project_id=project_id)
            return False

        self.projects = [p for p in self.projects if p.id != project_id]
        if self.editing_project is not None and self.editing_project.id == project_id:
            self.editing_project = None
        self._succeeded("delete", "project", self._t("success.projectDeleted", name=project.title))
        return True

    async def toggle_milestone(self, project_id: str, index: int) -> Project | None:
        """Flip a milestone and save the recomputed progress.

        Raises:
            IndexError: If the project has no milestone at ``index``
        """
        project = self.find_project(project_id)
        if project is None:
            return None
        return await self.update_project(toggle_project_milestone(project, index))

    # State

    def snapshot(self) -> dict[str, Any]:
        """Serializable view of the controller state."""
        user = self.user
        return {
            "user": user.model_dump() if user else None,
            "current_view": self.current_view,
            "selected_calendar": self.selected_calendar,
            "calendars": self.sidebar.calendar_entries(self.calendars, self.selected_calendar),
            "menu": self.sidebar.menu_items(self.current_view),
            "title": self.header.title(self.current_view),
            "new_button_label": self.header.new_button_label(self.current_view),
            "tasks": [task.model_dump() for task in self.calendar_tasks()],
            "projects": self.projects_view.cards(self.calendar_projects()),
            "editing_project": self.editing_project.model_dump() if self.editing_project else None,
            "open_dialog": self.open_dialog,
            "show_tutorial": self.show_tutorial,
            "calendar_mode": self.calendar_mode,
            "calendar_anchor": self.calendar_anchor.isoformat(),
        }
