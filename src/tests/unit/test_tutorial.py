"""Unit tests for the first-run tutorial."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from agenda_service.core.session import AuthResult
from agenda_service.core.tutorial import STEP_LAYOUT, Tutorial
from agenda_service.i18n import Translator


@pytest.fixture
def session() -> MagicMock:
    mock = MagicMock()
    mock.update_profile = AsyncMock(return_value=AuthResult())
    return mock


@pytest.fixture
def tutorial(session: MagicMock) -> Tutorial:
    walkthrough = Tutorial(session, Translator("en"))
    walkthrough.show()
    return walkthrough


class TestTutorial:
    """Tests for stepping through the tutorial."""

    def test_seven_localized_steps(self, tutorial: Tutorial) -> None:
        steps = tutorial.steps()

        assert len(steps) == len(STEP_LAYOUT) == 7
        assert steps[0].id == "welcome"
        assert steps[0].position == "center"
        assert steps[1].target == ".sidebar"
        assert steps[-1].id == "complete"
        assert all(step.title and not step.title.startswith("tutorial.") for step in steps)

    def test_state_labels(self, tutorial: Tutorial) -> None:
        state = tutorial.state()

        assert state.visible is True
        assert state.index == 0
        assert state.total == 7
        assert state.next_label == "Next"
        assert state.skip_label == "Skip tutorial"

    async def test_next_and_previous(self, tutorial: Tutorial, session: MagicMock) -> None:
        tutorial.previous()
        assert tutorial.index == 0

        await tutorial.next()
        await tutorial.next()
        assert tutorial.index == 2

        tutorial.previous()
        assert tutorial.index == 1
        session.update_profile.assert_not_awaited()

    async def test_finish_on_last_step(self, tutorial: Tutorial, session: MagicMock) -> None:
        for _ in range(6):
            await tutorial.next()
        assert tutorial.is_last
        assert tutorial.state().next_label == "Finish"

        result = await tutorial.next()

        assert result is not None and result.ok
        assert tutorial.visible is False
        session.update_profile.assert_awaited_once_with({"tutorial_completed": True})

    async def test_skip(self, tutorial: Tutorial, session: MagicMock) -> None:
        await tutorial.next()

        await tutorial.skip()

        assert tutorial.visible is False
        session.update_profile.assert_awaited_once_with({"tutorial_completed": True})

    async def test_failed_save_still_hides(self, tutorial: Tutorial, session: MagicMock) -> None:
        session.update_profile.return_value = AuthResult(error="No user logged in")

        result = await tutorial.skip()

        assert not result.ok
        assert tutorial.visible is False
