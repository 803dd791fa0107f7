"""First-run tutorial walkthrough."""

from typing import Literal

from pydantic import BaseModel

from agenda_service.core.session import AuthResult, AuthSession
from agenda_service.i18n import Translator
from agenda_service.utils.logging import get_logger

logger = get_logger(__name__)

Position = Literal["center", "top", "bottom", "left", "right"]

# (step id, translation section, highlighted element, card position)
STEP_LAYOUT: list[tuple[str, str, str | None, Position]] = [
    ("welcome", "welcome", None, "center"),
    ("sidebar", "sidebar", ".sidebar", "right"),
    ("calendar-view", "calendar", ".calendar-view", "top"),
    ("new-button", "newButton", ".new-button", "bottom"),
    ("search", "search", ".search-bar", "bottom"),
    ("tasks", "tasks", ".tasks-nav", "right"),
    ("complete", "complete", None, "center"),
]


class TutorialStep(BaseModel):
    id: str
    title: str
    description: str
    target: str | None = None
    position: Position = "center"


class TutorialState(BaseModel):
    """Serializable snapshot of the tutorial."""

    visible: bool
    index: int
    total: int
    step: TutorialStep
    next_label: str
    previous_label: str
    skip_label: str
    is_last: bool


class Tutorial:
    """Seven-step walkthrough shown until the profile records completion."""

    def __init__(self, session: AuthSession, translator: Translator) -> None:
        self._session = session
        self._translator = translator
        self.index = 0
        self.visible = False

    def steps(self) -> list[TutorialStep]:
        t = self._translator.t
        return [
            TutorialStep(
                id=step_id,
                title=t(f"tutorial.{section}.title"),
                description=t(f"tutorial.{section}.description"),
                target=target,
                position=position,
            )
            for step_id, section, target, position in STEP_LAYOUT
        ]

    def show(self) -> None:
        self.index = 0
        self.visible = True

    @property
    def is_last(self) -> bool:
        return self.index == len(STEP_LAYOUT) - 1

    def current(self) -> TutorialStep:
        return self.steps()[self.index]

    def state(self) -> TutorialState:
        t = self._translator.t
        return TutorialState(
            visible=self.visible,
            index=self.index,
            total=len(STEP_LAYOUT),
            step=self.current(),
            next_label=t("tutorial.finish") if self.is_last else t("tutorial.next"),
            previous_label=t("tutorial.previous"),
            skip_label=t("tutorial.skip"),
            is_last=self.is_last,
        )

    async def next(self) -> AuthResult | None:
        """Advance one step, completing the tutorial on the last one."""
        if not self.is_last:
            self.index += 1
            return None
        return await self.complete()

    def previous(self) -> None:
        if self.index > 0:
            self.index -= 1

    async def skip(self) -> AuthResult:
        logger.info("tutorial_skipped", step=self.index)
        return await self._finish()

    async def complete(self) -> AuthResult:
        logger.info("tutorial_completed")
        return await self._finish()

    async def _finish(self) -> AuthResult:
        self.visible = False
        result = await self._session.update_profile({"tutorial_completed": True})
        if not result.ok:
            logger.warning("tutorial_completion_not_saved", error=result.error)
        return result
