"""Calendar event aggregation and calendar grid layout.

Tasks, projects and milestones with a due date are turned into
``CalendarEvent`` records, which are then bucketed by ISO date and laid out
on month, week or day grids. Weeks start on Sunday.
"""

import calendar as _calendar
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Literal, Sequence

from pydantic import BaseModel, Field

from agenda_service.i18n import Translator
from agenda_service.models.base import CalendarMode, EventType, ProjectStatus
from agenda_service.models.domain import CalendarEvent, Project, Task

MONTH_CHIP_LIMIT = 2
MONTH_DOT_LIMIT = 7
WEEK_CHIP_LIMIT = 2
DEFAULT_UPCOMING_LIMIT = 6

HOUR_LABELS = [f"{hour:02d}:00" for hour in range(24)]

_TASK_COLORS = {"high": "bg-red-600", "medium": "bg-orange-500", "low": "bg-blue-600"}
_PROJECT_COLORS = {"high": "bg-red-500", "medium": "bg-yellow-500", "low": "bg-blue-500"}
_COMPLETED_COLOR = "bg-green-500"
_MILESTONE_COLOR = "bg-purple-500"
_UNKNOWN_COLOR = "bg-gray-500"


class ChipStyle(BaseModel):
    """Hex colours of an event chip."""

    background: str
    border: str
    text: str


_COMPLETED_CHIP = ChipStyle(background="#dcfce7", border="#bbf7d0", text="#166534")
_MILESTONE_CHIP = ChipStyle(background="#faf5ff", border="#e9d5ff", text="#7c3aed")
_UNKNOWN_CHIP = ChipStyle(background="#f9fafb", border="#e5e7eb", text="#4b5563")
_TASK_CHIPS = {
    "high": ChipStyle(background="#fef2f2", border="#fecaca", text="#dc2626"),
    "medium": ChipStyle(background="#fff7ed", border="#fed7aa", text="#ea580c"),
    "low": ChipStyle(background="#eff6ff", border="#bfdbfe", text="#2563eb"),
}
_PROJECT_CHIPS = {
    "high": ChipStyle(background="#fef2f2", border="#fecaca", text="#dc2626"),
    "medium": ChipStyle(background="#fefce8", border="#fef08a", text="#d97706"),
    "low": ChipStyle(background="#eff6ff", border="#bfdbfe", text="#2563eb"),
}


class MonthCell(BaseModel):
    date: date
    day: int
    in_month: bool
    is_today: bool
    chips: list[CalendarEvent] = Field(default_factory=list)
    dots: list[CalendarEvent] = Field(default_factory=list)
    overflow: int = 0


class MonthGrid(BaseModel):
    year: int
    month: int
    weekdays: list[str]
    weeks: list[list[MonthCell]]


class WeekDay(BaseModel):
    date: date
    day: int
    weekday: str
    is_today: bool
    chips: list[CalendarEvent] = Field(default_factory=list)
    overflow: int = 0
    events: list[CalendarEvent] = Field(default_factory=list)


class WeekGrid(BaseModel):
    start: date
    end: date
    days: list[WeekDay]
    hours: list[str] = Field(default_factory=lambda: list(HOUR_LABELS))


class DayView(BaseModel):
    date: date
    is_today: bool
    events: list[CalendarEvent]
    hours: list[str] = Field(default_factory=lambda: list(HOUR_LABELS))


def build_calendar_events(tasks: Iterable[Task], projects: Iterable[Project]) -> list[CalendarEvent]:
    """Derive calendar events from tasks, projects and milestones.

    Task events come first, then for each project its own event followed by
    the events of its dated milestones.
    """
    events: list[CalendarEvent] = []

    for task in tasks:
        if task.due_date:
            events.append(
                CalendarEvent(
                    id=f"task-{task.id}",
                    title=task.title,
                    date=task.due_date,
                    type=EventType.TASK,
                    priority=task.priority,
                    completed=task.completed,
                    project_title=task.project,
                )
            )

    for project in projects:
        if project.due_date:
            events.append(
                CalendarEvent(
                    id=f"project-{project.id}",
                    title=project.title,
                    date=project.due_date,
                    type=EventType.PROJECT,
                    priority=project.priority,
                    completed=project.status == ProjectStatus.COMPLETED.value,
                )
            )
        for index, milestone in enumerate(project.milestones):
            if milestone.due_date:
                events.append(
                    CalendarEvent(
                        id=f"milestone-{project.id}-{index}",
                        title=milestone.name,
                        date=milestone.due_date,
                        type=EventType.MILESTONE,
                        completed=milestone.completed,
                        project_title=project.title,
                    )
                )

    return events


def events_for_date(events: Iterable[CalendarEvent], day: date) -> list[CalendarEvent]:
    """Events whose date string equals ``day`` in ISO form."""
    key = day.isoformat()
    return [event for event in events if event.date == key]


def bucket_events(events: Iterable[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    buckets: dict[str, list[CalendarEvent]] = defaultdict(list)
    for event in events:
        buckets[event.date].append(event)
    return dict(buckets)


def event_color(event: CalendarEvent) -> str:
    """Background utility class for an event marker."""
    if event.completed:
        return _COMPLETED_COLOR
    if event.type == EventType.TASK.value:
        return _TASK_COLORS.get(event.priority or "", _UNKNOWN_COLOR)
    if event.type == EventType.PROJECT.value:
        return _PROJECT_COLORS.get(event.priority or "", _UNKNOWN_COLOR)
    return _MILESTONE_COLOR


def chip_style(event: CalendarEvent) -> ChipStyle:
    if event.completed:
        return _COMPLETED_CHIP
    if event.type == EventType.TASK.value:
        return _TASK_CHIPS.get(event.priority or "", _UNKNOWN_CHIP)
    if event.type == EventType.PROJECT.value:
        return _PROJECT_CHIPS.get(event.priority or "", _UNKNOWN_CHIP)
    return _MILESTONE_CHIP


def sunday_index(day: date) -> int:
    """Day of week counted from Sunday = 0."""
    return (day.weekday() + 1) % 7


def start_of_week(day: date) -> date:
    return day - timedelta(days=sunday_index(day))


def month_grid(
    anchor: date,
    events: Sequence[CalendarEvent],
    today: date,
    translator: Translator | None = None,
) -> MonthGrid:
    """Lay out the month containing ``anchor``.

    The grid runs from the Sunday on or before the 1st to the Saturday on or
    after the last day, so it always holds whole weeks.
    """
    first = anchor.replace(day=1)
    last = anchor.replace(day=_calendar.monthrange(anchor.year, anchor.month)[1])
    start = start_of_week(first)
    end = last + timedelta(days=6 - sunday_index(last))
    buckets = bucket_events(events)

    weeks: list[list[MonthCell]] = []
    current = start
    while current <= end:
        if sunday_index(current) == 0:
            weeks.append([])
        day_events = buckets.get(current.isoformat(), [])
        weeks[-1].append(
            MonthCell(
                date=current,
                day=current.day,
                in_month=current.month == anchor.month,
                is_today=current == today,
                chips=day_events[:MONTH_CHIP_LIMIT],
                dots=day_events[MONTH_CHIP_LIMIT:MONTH_DOT_LIMIT],
                overflow=max(0, len(day_events) - MONTH_DOT_LIMIT),
            )
        )
        current += timedelta(days=1)

    weekdays = list(translator.t("daysShort")) if translator else []
    return MonthGrid(year=anchor.year, month=anchor.month, weekdays=weekdays, weeks=weeks)


def week_grid(
    anchor: date,
    events: Sequence[CalendarEvent],
    today: date,
    translator: Translator | None = None,
) -> WeekGrid:
    """Seven days starting on the Sunday of ``anchor``'s week."""
    start = start_of_week(anchor)
    buckets = bucket_events(events)
    short_names = list(translator.t("daysShort")) if translator else [""] * 7

    days: list[WeekDay] = []
    for offset in range(7):
        current = start + timedelta(days=offset)
        day_events = buckets.get(current.isoformat(), [])
        days.append(
            WeekDay(
                date=current,
                day=current.day,
                weekday=short_names[offset],
                is_today=current == today,
                chips=day_events[:WEEK_CHIP_LIMIT],
                overflow=max(0, len(day_events) - WEEK_CHIP_LIMIT),
                events=day_events,
            )
        )
    return WeekGrid(start=start, end=start + timedelta(days=6), days=days)


def day_view(anchor: date, events: Sequence[CalendarEvent], today: date) -> DayView:
    return DayView(date=anchor, is_today=anchor == today, events=events_for_date(events, anchor))


def upcoming_events(
    events: Iterable[CalendarEvent],
    today: date,
    limit: int = DEFAULT_UPCOMING_LIMIT,
) -> list[CalendarEvent]:
    """Events dated today or later, soonest first.

    Events whose date does not parse are skipped.
    """
    dated: list[tuple[date, CalendarEvent]] = []
    for event in events:
        try:
            event_date = date.fromisoformat(event.date)
        except ValueError:
            continue
        if event_date >= today:
            dated.append((event_date, event))
    dated.sort(key=lambda item: item[0])
    return [event for _, event in dated[:limit]]


def navigate(
    anchor: date,
    view: CalendarMode | str,
    direction: Literal["prev", "next"],
) -> date:
    """Move the anchor one month, week or day backwards or forwards.

    Month moves keep the day of month, clamped to the target month's length.
    """
    step = -1 if direction == "prev" else 1
    mode = CalendarMode(view)
    if mode == CalendarMode.MONTH:
        month_index = anchor.year * 12 + (anchor.month - 1) + step
        year, month = divmod(month_index, 12)
        month += 1
        day = min(anchor.day, _calendar.monthrange(year, month)[1])
        return date(year, month, day)
    if mode == CalendarMode.WEEK:
        return anchor + timedelta(days=7 * step)
    return anchor + timedelta(days=step)


def view_title(anchor: date, view: CalendarMode | str, translator: Translator) -> str:
    """Localized header for the calendar view."""
    months = translator.t("months")
    month_name = months[anchor.month - 1]
    mode = CalendarMode(view)
    if mode == CalendarMode.MONTH:
        return f"{month_name} {anchor.year}"
    if mode == CalendarMode.WEEK:
        start = start_of_week(anchor)
        end = start + timedelta(days=6)
        return f"{start.day} - {end.day} {month_name} {anchor.year}"
    day_names = list(translator.t("days").values())
    return f"{day_names[sunday_index(anchor)]}, {anchor.day} {month_name} {anchor.year}"
