"""Transient toast notifications."""

import itertools
from datetime import datetime, timezone

from agenda_service.models.base import ToastKind
from agenda_service.models.domain import Toast
from agenda_service.utils.logging import get_logger
from agenda_service.utils.metrics import get_metrics

logger = get_logger(__name__)
metrics = get_metrics()

DEFAULT_TOAST_DURATION = 3.0


class ToastCenter:
    """Queue of toasts that disappear once their duration has elapsed."""

    def __init__(self, default_duration: float = DEFAULT_TOAST_DURATION) -> None:
        self.default_duration = default_duration
        self._toasts: list[Toast] = []
        self._ids = itertools.count(1)

    def show(
        self,
        message: str,
        kind: ToastKind | str = ToastKind.SUCCESS,
        duration: float | None = None,
        now: datetime | None = None,
    ) -> Toast:
        toast = Toast(
            id=str(next(self._ids)),
            message=message,
            kind=ToastKind(kind),
            created_at=now or datetime.now(timezone.utc),
            duration=self.default_duration if duration is None else duration,
        )
        self._prune(toast.created_at)
        self._toasts.append(toast)
        metrics.record_toast(toast.kind)
        logger.debug("toast_shown", kind=toast.kind, toast_message=message)
        return toast

    def active(self, now: datetime | None = None) -> list[Toast]:
        """Toasts still on screen; expired ones are dropped."""
        self._prune(now or datetime.now(timezone.utc))
        return list(self._toasts)

    def _prune(self, now: datetime) -> None:
        self._toasts = [toast for toast in self._toasts if not toast.expired(now)]

    def dismiss(self, toast_id: str) -> bool:
        before = len(self._toasts)
        self._toasts = [toast for toast in self._toasts if toast.id != toast_id]
        return len(self._toasts) != before

    def clear(self) -> None:
        self._toasts.clear()
