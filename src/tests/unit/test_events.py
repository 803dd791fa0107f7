"""Unit tests for calendar event aggregation and grid layout."""

from datetime import date

import pytest

from agenda_service.core.events import (
    MONTH_CHIP_LIMIT,
    build_calendar_events,
    chip_style,
    day_view,
    event_color,
    events_for_date,
    month_grid,
    navigate,
    start_of_week,
    sunday_index,
    upcoming_events,
    view_title,
    week_grid,
)
from agenda_service.core.progress import toggle_milestone, with_recomputed_progress
from agenda_service.i18n import Translator
from agenda_service.models import CalendarEvent, Milestone
from tests.fixtures import ProjectFactory, TaskFactory


def _event(day: str, title: str = "E", **kwargs) -> CalendarEvent:
    return CalendarEvent(id=f"task-{title}", title=title, date=day, type="task", priority="low", **kwargs)


class TestBuildCalendarEvents:
    """Tests for build_calendar_events."""

    def test_launch_project_scenario(self) -> None:
        project = with_recomputed_progress(
            ProjectFactory.create(
                id="launch",
                title="Launch",
                due_date="2024-06-01",
                milestones=[
                    Milestone(name="Design", completed=True, due_date="2024-05-01"),
                    Milestone(name="Build", completed=False, due_date="2024-05-15"),
                ],
            )
        )

        events = build_calendar_events([], [project])

        assert [(e.id, e.type, e.date) for e in events] == [
            ("project-launch", "project", "2024-06-01"),
            ("milestone-launch-0", "milestone", "2024-05-01"),
            ("milestone-launch-1", "milestone", "2024-05-15"),
        ]
        assert project.progress == 50
        assert project.status == "in-progress"
        assert events[1].completed is True
        assert events[1].project_title == "Launch"

        finished = toggle_milestone(project, 1)
        assert finished.progress == 100
        assert finished.status == "completed"
        assert build_calendar_events([], [finished])[0].completed is True

    def test_tasks_come_first(self) -> None:
        task = TaskFactory.create(id="t1", title="Write", due_date="2024-03-10", priority="high", project="API v2")
        project = ProjectFactory.create(id="p1", due_date="2024-03-01")

        events = build_calendar_events([task], [project])

        assert [e.id for e in events] == ["task-t1", "project-p1"]
        assert events[0].priority == "high"
        assert events[0].project_title == "API v2"

    def test_undated_milestones_skipped(self) -> None:
        project = ProjectFactory.create(id="p1", milestones=[Milestone(name="No date")])

        assert [e.id for e in build_calendar_events([], [project])] == ["project-p1"]


class TestColors:
    """Tests for event_color and chip_style."""

    @pytest.mark.parametrize(
        "event_type,priority,completed,expected",
        [
            ("task", "high", False, "bg-red-600"),
            ("task", "medium", False, "bg-orange-500"),
            ("task", "low", False, "bg-blue-600"),
            ("project", "high", False, "bg-red-500"),
            ("project", "medium", False, "bg-yellow-500"),
            ("project", "low", False, "bg-blue-500"),
            ("milestone", None, False, "bg-purple-500"),
            ("task", "high", True, "bg-green-500"),
            ("milestone", None, True, "bg-green-500"),
        ],
    )
    def test_event_color(self, event_type: str, priority: str | None, completed: bool, expected: str) -> None:
        event = CalendarEvent(id="x", title="x", date="2024-01-01", type=event_type, priority=priority, completed=completed)

        assert event_color(event) == expected

    def test_chip_style(self) -> None:
        assert chip_style(_event("2024-01-01", completed=True)).text == "#166534"
        assert chip_style(_event("2024-01-01")).background == "#eff6ff"
        milestone = CalendarEvent(id="m", title="m", date="2024-01-01", type="milestone")
        assert chip_style(milestone).text == "#7c3aed"


class TestWeekHelpers:
    """Tests for Sunday-based week arithmetic."""

    def test_sunday_index(self) -> None:
        assert sunday_index(date(2024, 3, 3)) == 0  # Sunday
        assert sunday_index(date(2024, 3, 9)) == 6  # Saturday

    def test_start_of_week(self) -> None:
        assert start_of_week(date(2024, 3, 6)) == date(2024, 3, 3)
        assert start_of_week(date(2024, 3, 3)) == date(2024, 3, 3)


class TestMonthGrid:
    """Tests for month_grid."""

    def test_whole_weeks(self) -> None:
        grid = month_grid(date(2024, 3, 15), [], today=date(2024, 3, 15))

        cells = [cell for week in grid.weeks for cell in week]
        assert all(len(week) == 7 for week in grid.weeks)
        assert cells[0].date == date(2024, 2, 25)
        assert cells[-1].date == date(2024, 4, 6)
        assert len(grid.weeks) == 6
        assert not cells[0].in_month
        assert sum(1 for cell in cells if cell.is_today) == 1

    def test_chips_dots_and_overflow(self) -> None:
        events = [_event("2024-03-05", title=str(i)) for i in range(10)]

        grid = month_grid(date(2024, 3, 1), events, today=date(2000, 1, 1))

        cell = next(cell for week in grid.weeks for cell in week if cell.date == date(2024, 3, 5))
        assert len(cell.chips) == MONTH_CHIP_LIMIT
        assert len(cell.dots) == 5
        assert cell.overflow == 3

    def test_weekday_labels(self) -> None:
        grid = month_grid(date(2024, 3, 1), [], date(2024, 3, 1), Translator("en"))

        assert grid.weekdays == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class TestWeekAndDay:
    """Tests for week_grid and day_view."""

    def test_week_grid(self) -> None:
        events = [_event("2024-03-06", title=str(i)) for i in range(3)]

        grid = week_grid(date(2024, 3, 6), events, today=date(2024, 3, 6), translator=Translator("es"))

        assert grid.start == date(2024, 3, 3)
        assert grid.end == date(2024, 3, 9)
        wednesday = grid.days[3]
        assert wednesday.weekday == "Mié"
        assert wednesday.is_today
        assert len(wednesday.chips) == 2
        assert wednesday.overflow == 1
        assert len(wednesday.events) == 3
        assert len(grid.hours) == 24

    def test_day_view(self) -> None:
        events = [_event("2024-03-06", title="a"), _event("2024-03-07", title="b")]

        view = day_view(date(2024, 3, 6), events, today=date(2024, 3, 7))

        assert [e.title for e in view.events] == ["a"]
        assert view.is_today is False
        assert view.hours[0] == "00:00"

    def test_events_for_date(self) -> None:
        events = [_event("2024-03-06", title="a"), _event("2024-03-07", title="b")]

        assert [e.title for e in events_for_date(events, date(2024, 3, 7))] == ["b"]


class TestUpcomingEvents:
    """Tests for upcoming_events."""

    def test_sorted_limited_and_inclusive(self) -> None:
        events = [
            _event("2024-03-20", title="later"),
            _event("2024-03-01", title="past"),
            _event("2024-03-10", title="today"),
            _event("2024-03-12", title="soon"),
        ]

        upcoming = upcoming_events(events, today=date(2024, 3, 10), limit=2)

        assert [e.title for e in upcoming] == ["today", "soon"]

    def test_unparseable_dates_skipped(self) -> None:
        events = [_event("someday", title="bad"), _event("2024-03-12", title="ok")]

        assert [e.title for e in upcoming_events(events, today=date(2024, 3, 10))] == ["ok"]


class TestNavigation:
    """Tests for navigate and view_title."""

    @pytest.mark.parametrize(
        "anchor,view,direction,expected",
        [
            (date(2024, 3, 15), "month", "next", date(2024, 4, 15)),
            (date(2024, 1, 31), "month", "next", date(2024, 2, 29)),
            (date(2024, 1, 15), "month", "prev", date(2023, 12, 15)),
            (date(2024, 12, 15), "month", "next", date(2025, 1, 15)),
            (date(2024, 3, 15), "week", "next", date(2024, 3, 22)),
            (date(2024, 3, 1), "week", "prev", date(2024, 2, 23)),
            (date(2024, 3, 1), "day", "prev", date(2024, 2, 29)),
        ],
    )
    def test_navigate(self, anchor: date, view: str, direction: str, expected: date) -> None:
        assert navigate(anchor, view, direction) == expected

    def test_titles(self) -> None:
        es = Translator("es")
        en = Translator("en")

        assert view_title(date(2024, 3, 6), "month", es) == "Marzo 2024"
        assert view_title(date(2024, 3, 6), "week", en) == "3 - 9 March 2024"
        assert view_title(date(2024, 3, 6), "day", es) == "Miércoles, 6 Marzo 2024"
