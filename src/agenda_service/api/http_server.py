"""FastAPI HTTP surface over the application context."""

from contextlib import asynccontextmanager
from datetime import date
from typing import Any, AsyncIterator, Literal

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from agenda_service import __version__
from agenda_service.core.context import AppContext
from agenda_service.core.events import (
    chip_style,
    day_view,
    event_color,
    month_grid,
    view_title,
    week_grid,
)
from agenda_service.core.session import NO_USER_ERROR
from agenda_service.forms import (
    CalendarForm,
    InvitationForm,
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
from agenda_service.i18n import Language
from agenda_service.models.base import CalendarMode, Priority, ToastKind, ViewName
from agenda_service.models.domain import CalendarEvent
from agenda_service.utils.logging import get_logger

logger = get_logger(__name__)


class SignUpRequest(BaseModel):
    email: str
    password: str
    full_name: str = ""


class SignInRequest(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    full_name: str | None = None
    avatar_url: str | None = None
    language: Literal["es", "en"] | None = None
    tutorial_completed: bool | None = None


class ViewRequest(BaseModel):
    view: ViewName


class SelectCalendarRequest(BaseModel):
    calendar_id: str


class CalendarCreateRequest(CalendarForm):
    quick: bool = Field(default=False, description="Sidebar quick-create: random colour, name only")


class TaskUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    due_date: str | None = None
    project: str | None = None
    tags: list[str] | None = None


class LanguageRequest(BaseModel):
    language: Language


def _event_payload(event: CalendarEvent) -> dict[str, Any]:
    return {**event.model_dump(), "color": event_color(event), "chip": chip_style(event).model_dump()}


def create_http_server(context: AppContext, manage_context: bool = True) -> FastAPI:
    """Create the FastAPI application.

    Args:
        context: Application context serving the requests
        manage_context: Initialize the context on startup and tear it down on shutdown

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if manage_context and not context.initialized:
            await context.initialize()
        try:
            yield
        finally:
            if manage_context:
                await context.teardown()

    app = FastAPI(
        title="Agenda Service",
        description="Calendars, tasks and projects for the signed-in user",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    controller = context.app
    t = context.translator.t

    @app.exception_handler(ValidationFailed)
    async def validation_failed(_: Request, exc: ValidationFailed) -> JSONResponse:
        return JSONResponse(status_code=422, content={"errors": exc.errors})

    def require_user() -> None:
        if context.session.user is None:
            raise HTTPException(status_code=401, detail=NO_USER_ERROR)

    def backend_failure() -> JSONResponse:
        errors = [toast for toast in context.toasts.active() if toast.kind == ToastKind.ERROR.value]
        message = errors[-1].message if errors else t("auth.genericError")
        return JSONResponse(status_code=502, content={"error": message})

    authenticated = [Depends(require_user)]

    # Health and metrics

    @app.get("/health")
    async def health() -> JSONResponse:
        """Liveness check endpoint.

        Returns 200 if the service is running.
        """
        return JSONResponse(
            content={"status": "ok", "service": "agenda-service"},
            status_code=200,
        )

    @app.get("/health/ready")
    async def readiness() -> JSONResponse:
        """Readiness check endpoint.

        Verifies that the backend answers.
        """
        checks = {"backend": await context.backend.health_check()}
        all_healthy = all(checks.values())
        return JSONResponse(
            content={"status": "ready" if all_healthy else "not_ready", "checks": checks},
            status_code=200 if all_healthy else 503,
        )

    @app.get("/metrics")
    async def metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Auth

    @app.post("/auth/signup")
    async def sign_up(body: SignUpRequest) -> JSONResponse:
        if not body.full_name.strip():
            raise ValidationFailed({"full_name": t("auth.fullNameRequired")})
        result = await context.session.sign_up(body.email, body.password, body.full_name)
        return JSONResponse(status_code=201 if result.ok else 400, content=result.model_dump())

    @app.post("/auth/signin")
    async def sign_in(body: SignInRequest) -> JSONResponse:
        result = await context.session.sign_in(body.email, body.password)
        return JSONResponse(status_code=200 if result.ok else 401, content=result.model_dump())

    @app.post("/auth/signout")
    async def sign_out() -> dict[str, Any]:
        await context.session.sign_out()
        return {"error": None}

    @app.patch("/auth/profile")
    async def update_profile(body: ProfileUpdate) -> JSONResponse:
        updates = body.model_dump(exclude_none=True)
        result = await context.session.update_profile(updates)
        if result.error == NO_USER_ERROR:
            return JSONResponse(status_code=401, content=result.model_dump())
        if not result.ok:
            return JSONResponse(status_code=502, content=result.model_dump())
        if "language" in updates:
            context.set_language(updates["language"])
        return JSONResponse(status_code=200, content=result.model_dump())

    # Application state

    @app.get("/state", dependencies=authenticated)
    async def state() -> dict[str, Any]:
        return controller.snapshot()

    @app.put("/view", dependencies=authenticated)
    async def set_view(body: ViewRequest) -> dict[str, Any]:
        controller.set_view(body.view)
        return {"current_view": controller.current_view, "title": controller.header.title(controller.current_view)}

    @app.post("/new", dependencies=authenticated)
    async def new_click() -> dict[str, Any]:
        return {"dialog": controller.new_click()}

    @app.put("/calendars/selected", dependencies=authenticated)
    async def select_calendar(body: SelectCalendarRequest) -> dict[str, Any]:
        controller.select_calendar(body.calendar_id)
        return {"selected_calendar": controller.selected_calendar}

    # Calendars

    @app.get("/calendars", dependencies=authenticated)
    async def list_calendars() -> dict[str, Any]:
        return {
            "heading": controller.sidebar.calendars_heading(controller.calendars),
            "calendars": controller.sidebar.calendar_entries(controller.calendars, controller.selected_calendar),
            "colors": color_options(context.translator),
        }

    @app.post("/calendars", dependencies=authenticated, status_code=201)
    async def create_calendar(body: CalendarCreateRequest) -> Any:
        if body.quick:
            draft = build_quick_calendar(body.name, context.translator)
        else:
            draft = build_calendar(body, context.translator)
        calendar = await controller.create_calendar(draft)
        if calendar is None:
            return backend_failure()
        return calendar.model_dump()

    @app.patch("/calendars/{calendar_id}", dependencies=authenticated)
    async def update_calendar(calendar_id: str, body: CalendarForm) -> Any:
        if controller.find_calendar(calendar_id) is None:
            raise HTTPException(status_code=404, detail="Calendar not found")
        calendar = await controller.update_calendar(calendar_id, build_calendar(body, context.translator))
        if calendar is None:
            return backend_failure()
        return calendar.model_dump()

    @app.delete("/calendars/{calendar_id}", dependencies=authenticated, status_code=204)
    async def delete_calendar(calendar_id: str) -> Response:
        if controller.find_calendar(calendar_id) is None:
            raise HTTPException(status_code=404, detail="Calendar not found")
        if not await controller.delete_calendar(calendar_id):
            return backend_failure()
        return Response(status_code=204)

    # Tasks

    @app.get("/tasks", dependencies=authenticated)
    async def list_tasks(
        status_filter: Literal["all", "pending", "completed"] | None = Query(default=None, alias="filter"),
    ) -> dict[str, Any]:
        view = controller.tasks_view
        if status_filter is not None:
            view.set_filter(status_filter)
        today = date.today()
        return {
            "filter": view.filter,
            "counts": view.counts(),
            "tasks": [
                {
                    **task.model_dump(),
                    "overdue": view.is_overdue(task, today),
                    "completing": view.is_completing(task.id),
                }
                for task in view.visible()
            ],
        }

    @app.post("/tasks", dependencies=authenticated, status_code=201)
    async def create_task(body: TaskForm) -> Any:
        task = await controller.create_task(build_task(body, context.translator, controller.selected_calendar))
        if task is None:
            return backend_failure()
        return task.model_dump()

    @app.patch("/tasks/{task_id}", dependencies=authenticated)
    async def update_task(task_id: str, body: TaskUpdate) -> Any:
        existing = controller.find_task(task_id)
        if existing is None:
            raise HTTPException(status_code=404, detail="Task not found")
        changes = body.model_dump(exclude_none=True, mode="json")
        if "title" in changes and not changes["title"].strip():
            raise ValidationFailed({"title": t("titleRequired")})
        task = await controller.update_task(existing.model_copy(update=changes))
        if task is None:
            return backend_failure()
        return task.model_dump()

    @app.post("/tasks/{task_id}/toggle", dependencies=authenticated)
    async def toggle_task(task_id: str) -> Any:
        if controller.find_task(task_id) is None:
            raise HTTPException(status_code=404, detail="Task not found")
        task = await controller.toggle_task(task_id)
        if task is None:
            return backend_failure()
        return {**task.model_dump(), "completing": controller.tasks_view.is_completing(task_id)}

    @app.delete("/tasks/{task_id}", dependencies=authenticated, status_code=204)
    async def delete_task(task_id: str) -> Response:
        if controller.find_task(task_id) is None:
            raise HTTPException(status_code=404, detail="Task not found")
        if not await controller.delete_task(task_id):
            return backend_failure()
        return Response(status_code=204)

    # Projects

    @app.get("/projects", dependencies=authenticated)
    async def list_projects() -> dict[str, Any]:
        return {"projects": controller.projects_view.cards(controller.calendar_projects())}

    @app.post("/projects", dependencies=authenticated, status_code=201)
    async def create_project(body: ProjectForm) -> Any:
        project = await controller.create_project(
            build_project(body, context.translator, controller.selected_calendar)
        )
        if project is None:
            return backend_failure()
        return project.model_dump()

    @app.post("/projects/{project_id}/edit", dependencies=authenticated)
    async def edit_project(project_id: str) -> dict[str, Any]:
        project = controller.find_project(project_id)
        if project is None:
            raise HTTPException(status_code=404, detail="Project not found")
        controller.edit_project(project)
        return {"dialog": controller.open_dialog, "editing_project": project.model_dump()}

    @app.put("/projects/{project_id}", dependencies=authenticated)
    async def update_project(project_id: str, body: ProjectForm) -> Any:
        existing = controller.find_project(project_id)
        if existing is None:
            raise HTTPException(status_code=404, detail="Project not found")
        updated = build_project(body, context.translator, controller.selected_calendar, editing=existing)
        project = await controller.update_project(updated)
        if project is None:
            return backend_failure()
        return project.model_dump()

    @app.post("/projects/{project_id}/duplicate", dependencies=authenticated, status_code=201)
    async def duplicate_project(project_id: str) -> Any:
        existing = controller.find_project(project_id)
        if existing is None:
            raise HTTPException(status_code=404, detail="Project not found")
        project = await controller.duplicate_project(existing)
        if project is None:
            return backend_failure()
        return project.model_dump()

    @app.post("/projects/{project_id}/milestones/{index}/toggle", dependencies=authenticated)
    async def toggle_milestone(project_id: str, index: int) -> Any:
        if controller.find_project(project_id) is None:
            raise HTTPException(status_code=404, detail="Project not found")
        try:
            project = await controller.toggle_milestone(project_id, index)
        except IndexError:
            raise HTTPException(status_code=404, detail="Milestone not found") from None
        if project is None:
            return backend_failure()
        return project.model_dump()

    @app.delete("/projects/{project_id}", dependencies=authenticated, status_code=204)
    async def delete_project(project_id: str) -> Response:
        if controller.find_project(project_id) is None:
            raise HTTPException(status_code=404, detail="Project not found")
        if not await controller.delete_project(project_id):
            return backend_failure()
        return Response(status_code=204)

    # Calendar grid

    @app.get("/calendar", dependencies=authenticated)
    async def calendar(
        view: CalendarMode | None = None,
        anchor: date | None = Query(default=None, alias="date"),
        direction: Literal["prev", "next", "today"] | None = None,
    ) -> dict[str, Any]:
        if view is not None:
            controller.set_calendar_mode(view)
        if anchor is not None:
            controller.calendar_anchor = anchor
        if direction == "today":
            controller.go_to_today()
        elif direction is not None:
            controller.navigate_calendar(direction)

        today = date.today()
        current = controller.calendar_anchor
        events = controller.calendar_events()
        mode = controller.calendar_mode
        if mode == CalendarMode.MONTH.value:
            grid: Any = month_grid(current, events, today, context.translator)
        elif mode == CalendarMode.WEEK.value:
            grid = week_grid(current, events, today, context.translator)
        else:
            grid = day_view(current, events, today)

        return {
            "view": mode,
            "date": current.isoformat(),
            "title": view_title(current, mode, context.translator),
            "grid": grid.model_dump(mode="json"),
            "events": [_event_payload(event) for event in events],
        }

    @app.get("/calendar/upcoming", dependencies=authenticated)
    async def upcoming() -> dict[str, Any]:
        events = controller.upcoming()
        return {
            "title": t("upcomingEvents"),
            "events": [_event_payload(event) for event in events],
            "empty_message": None if events else t("noEventsScheduled"),
        }

    # Search

    @app.get("/search", dependencies=authenticated)
    async def search(
        q: str = "",
        trigger: Literal["live", "enter", "click"] = "enter",
    ) -> dict[str, Any]:
        results = controller.search(q, trigger)
        count = len(results)
        return {
            "term": q,
            "visible": controller.search_box.visible,
            "summary": t("resultsFound", {"count": count, "plural": "" if count == 1 else "s"}),
            "results": [result.model_dump() for result in results],
        }

    # Localization

    @app.get("/language")
    async def get_language() -> dict[str, Any]:
        return {"language": context.translator.language.value}

    @app.put("/language")
    async def set_language(body: LanguageRequest) -> dict[str, Any]:
        language = context.set_language(body.language)
        if context.session.user is not None:
            await context.session.update_profile({"language": language.value})
        return {"language": language.value}

    @app.get("/i18n/{key:path}")
    async def translate(key: str, request: Request) -> dict[str, Any]:
        params = dict(request.query_params)
        return {"key": key, "value": t(key, params or None)}

    # Toasts and tutorial

    @app.get("/toasts")
    async def toasts() -> dict[str, Any]:
        return {"toasts": [toast.model_dump(mode="json") for toast in context.toasts.active()]}

    @app.delete("/toasts/{toast_id}", status_code=204)
    async def dismiss_toast(toast_id: str) -> Response:
        if not context.toasts.dismiss(toast_id):
            raise HTTPException(status_code=404, detail="Toast not found")
        return Response(status_code=204)

    @app.get("/tutorial", dependencies=authenticated)
    async def tutorial() -> dict[str, Any]:
        return controller.tutorial.state().model_dump()

    @app.post("/tutorial/next", dependencies=authenticated)
    async def tutorial_next() -> dict[str, Any]:
        await controller.tutorial.next()
        return controller.tutorial.state().model_dump()

    @app.post("/tutorial/previous", dependencies=authenticated)
    async def tutorial_previous() -> dict[str, Any]:
        controller.tutorial.previous()
        return controller.tutorial.state().model_dump()

    @app.post("/tutorial/skip", dependencies=authenticated)
    async def tutorial_skip() -> dict[str, Any]:
        await controller.tutorial.skip()
        return controller.tutorial.state().model_dump()

    # Collaborators

    @app.post("/invitations", dependencies=authenticated, status_code=202)
    async def invite(body: InvitationForm) -> dict[str, Any]:
        invitation = validate_invitation(body, context.translator)
        logger.info(
            "invitation_accepted",
            recipients=len(invitation.emails),
            role=invitation.role,
            calendars=invitation.calendars,
            projects=invitation.projects,
        )
        return invitation.model_dump()

    return app
