"""Milestone toggling and project progress recompute."""

import math
from typing import Sequence

from agenda_service.models.base import ProjectStatus
from agenda_service.models.domain import Milestone, Project

NEAR_COMPLETION_THRESHOLD = 80


def calculate_progress(milestones: Sequence[Milestone]) -> int:
    """Percentage of completed milestones, rounded half up. No milestones gives 0."""
    if not milestones:
        return 0
    done = sum(1 for milestone in milestones if milestone.completed)
    return math.floor(100 * done / len(milestones) + 0.5)


def status_for_progress(progress: int) -> ProjectStatus:
    if progress == 100:
        return ProjectStatus.COMPLETED
    if progress >= NEAR_COMPLETION_THRESHOLD:
        return ProjectStatus.NEAR_COMPLETION
    return ProjectStatus.IN_PROGRESS


def with_recomputed_progress(project: Project) -> Project:
    """Copy of ``project`` whose progress and status follow its milestones."""
    progress = calculate_progress(project.milestones)
    return project.model_copy(
        update={"progress": progress, "status": status_for_progress(progress).value}
    )


def toggle_milestone(project: Project, index: int) -> Project:
    """Flip one milestone's completion and recompute progress.

    The input project is left untouched.

    Raises:
        IndexError: If ``index`` does not address a milestone
    """
    if not 0 <= index < len(project.milestones):
        raise IndexError(f"Project {project.id} has no milestone {index}")

    milestones = [milestone.model_copy() for milestone in project.milestones]
    target = milestones[index]
    milestones[index] = target.model_copy(update={"completed": not target.completed})
    return with_recomputed_progress(project.model_copy(update={"milestones": milestones}))
