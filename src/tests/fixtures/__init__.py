"""Test fixtures: an in-memory backend and view model factories."""

from tests.fixtures.factories import (
    CalendarFactory,
    ModelFactory,
    ProjectFactory,
    TaskFactory,
    UserFactory,
    milestones,
)
from tests.fixtures.fake_backend import TEST_EMAIL, TEST_PASSWORD, FakeBackend

__all__ = [
    # Backend
    "FakeBackend",
    "TEST_EMAIL",
    "TEST_PASSWORD",
    # Factories
    "ModelFactory",
    "UserFactory",
    "CalendarFactory",
    "TaskFactory",
    "ProjectFactory",
    "milestones",
]
