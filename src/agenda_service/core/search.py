"""Search across tasks, projects and milestones."""

from typing import Iterable

from agenda_service.models.base import EventType, ProjectStatus
from agenda_service.models.domain import Project, SearchResult, Task
from agenda_service.utils.logging import get_logger
from agenda_service.utils.metrics import get_metrics

logger = get_logger(__name__)
metrics = get_metrics()

LIVE_SEARCH_MIN_LENGTH = 3


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def search(term: str, tasks: Iterable[Task], projects: Iterable[Project]) -> list[SearchResult]:
    """Case-insensitive substring search.

    Tasks match on title, description, project label or any tag; projects on
    title or description; milestones on name. Results list tasks, then
    projects, then milestones, with exact title matches moved to the front.

    Args:
        term: Search text; blank input returns no results
        tasks: Tasks to search
        projects: Projects (and their milestones) to search

    Returns:
        Matching results, one per matched item
    """
    if not term.strip():
        return []

    needle = term.lower()
    projects = list(projects)
    task_hits: list[SearchResult] = []
    project_hits: list[SearchResult] = []
    milestone_hits: list[SearchResult] = []

    for task in tasks:
        if (
            _contains(task.title, needle)
            or _contains(task.description, needle)
            or _contains(task.project, needle)
            or any(_contains(tag, needle) for tag in task.tags)
        ):
            task_hits.append(
                SearchResult(
                    type=EventType.TASK,
                    id=f"task-{task.id}",
                    title=task.title,
                    description=task.description,
                    priority=task.priority,
                    due_date=task.due_date,
                    completed=task.completed,
                    project_title=task.project,
                    assignee=task.assignee,
                )
            )

    for project in projects:
        if _contains(project.title, needle) or _contains(project.description, needle):
            project_hits.append(
                SearchResult(
                    type=EventType.PROJECT,
                    id=f"project-{project.id}",
                    title=project.title,
                    description=project.description,
                    priority=project.priority,
                    due_date=project.due_date,
                    completed=project.status == ProjectStatus.COMPLETED.value,
                    team=project.team,
                    progress=project.progress,
                )
            )
        for index, milestone in enumerate(project.milestones):
            if _contains(milestone.name, needle):
                milestone_hits.append(
                    SearchResult(
                        type=EventType.MILESTONE,
                        id=f"milestone-{project.id}-{index}",
                        title=milestone.name,
                        due_date=milestone.due_date,
                        completed=milestone.completed,
                        project_title=project.title,
                    )
                )

    results = task_hits + project_hits + milestone_hits
    # sorted() is stable: partial matches keep their relative order.
    return sorted(results, key=lambda result: result.title.lower() != needle)


class SearchBox:
    """State of the header search field.

    ``change`` runs live search once the value is long enough and clears
    results when the field is emptied; ``submit`` (Enter) and ``click`` (the
    search button) search the current value regardless of length.
    """

    def __init__(self, min_live_length: int = LIVE_SEARCH_MIN_LENGTH) -> None:
        self.min_live_length = min_live_length
        self.term = ""
        self.results: list[SearchResult] = []
        self.visible = False

    def change(self, value: str, tasks: Iterable[Task], projects: Iterable[Project]) -> list[SearchResult]:
        self.term = value
        if len(value) >= self.min_live_length:
            self._run("live", tasks, projects)
        elif not value:
            self.clear()
        return self.results

    def submit(self, tasks: Iterable[Task], projects: Iterable[Project]) -> list[SearchResult]:
        self._run("enter", tasks, projects)
        return self.results

    def click(self, tasks: Iterable[Task], projects: Iterable[Project]) -> list[SearchResult]:
        self._run("click", tasks, projects)
        return self.results

    def clear(self) -> None:
        self.results = []
        self.visible = False

    def _run(self, trigger: str, tasks: Iterable[Task], projects: Iterable[Project]) -> None:
        if not self.term.strip():
            self.clear()
            return
        self.results = search(self.term, tasks, projects)
        self.visible = True
        metrics.record_search(trigger, len(self.results))
        logger.debug("search_complete", trigger=trigger, result_count=len(self.results))
