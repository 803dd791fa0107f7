"""Authenticated session holder.

Tracks the signed-in user's profile row and keeps it in step with the
backend's auth state changes.
"""

from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from agenda_service.backend import (
    AuthEvent,
    BackendClient,
    BackendError,
    BackendSession,
    Subscription,
)
from agenda_service.models.rows import UserRow
from agenda_service.utils.logging import get_logger

logger = get_logger(__name__)

NO_USER_ERROR = "No user logged in"

UserListener = Callable[[UserRow | None, UserRow | None], Awaitable[None]]


class AuthResult(BaseModel):
    """Outcome of an auth operation. ``error`` is None on success."""

    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AuthSession:
    """Holds ``user``, ``session`` and ``loading`` for the running app."""

    def __init__(self, backend: BackendClient) -> None:
        self._backend = backend
        self.user: UserRow | None = None
        self.session: BackendSession | None = None
        self.loading = True
        self._subscription: Subscription | None = None
        self._listeners: list[UserListener] = []
        self._signing_up = False

    def on_user_change(self, listener: UserListener) -> None:
        """Register a callback invoked with (previous, current) user after each change."""
        self._listeners.append(listener)

    async def initialize(self) -> None:
        """Read the current session, load the profile, subscribe to auth changes."""
        self.session = await self._backend.auth.get_session()
        if self.session is not None:
            await self._fetch_profile(self.session.user.id)
        else:
            self.loading = False
        self._subscription = self._backend.auth.on_auth_state_change(self._handle_auth_change)
        logger.info("auth_session_initialized", signed_in=self.user is not None)

    def teardown(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def _handle_auth_change(self, event: AuthEvent, session: BackendSession | None) -> None:
        logger.debug("auth_state_changed", auth_event=event.value)
        self.session = session
        if session is not None:
            await self._fetch_profile(session.user.id)
        else:
            self.loading = False
            await self._set_user(None)

    async def _fetch_profile(self, user_id: str) -> None:
        try:
            row = await self._backend.table("users").select("*").eq("id", user_id).single().execute()
            await self._set_user(UserRow.model_validate(row))
        except BackendError as e:
            if self._signing_up and e.code == "PGRST116":
                logger.debug("user_profile_not_created_yet", user_id=user_id)
                return
            logger.error("user_profile_fetch_failed", user_id=user_id, error=e.message, status=e.status)
        finally:
            self.loading = False

    async def _set_user(self, user: UserRow | None) -> None:
        previous = self.user
        self.user = user
        for listener in list(self._listeners):
            await listener(previous, user)

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthResult:
        """Create the account and its profile row (language ``es``, tutorial pending)."""
        try:
            self._signing_up = True
            try:
                response = await self._backend.auth.sign_up(email, password)
            finally:
                self._signing_up = False
            if response.user is not None:
                await self._backend.table("users").insert(
                    {
                        "id": response.user.id,
                        "email": email,
                        "full_name": full_name,
                        "language": "es",
                        "tutorial_completed": False,
                    }
                ).execute()
                if response.session is not None:
                    # The SIGNED_IN event fired before the profile row existed.
                    await self._fetch_profile(response.user.id)
        except BackendError as e:
            logger.warning("sign_up_failed", error=e.message, status=e.status)
            return AuthResult(error=e.message)
        return AuthResult()

    async def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            await self._backend.auth.sign_in_with_password(email, password)
        except BackendError as e:
            logger.warning("sign_in_failed", error=e.message, status=e.status)
            return AuthResult(error=e.message)
        return AuthResult()

    async def sign_out(self) -> None:
        await self._backend.auth.sign_out()

    async def update_profile(self, updates: dict[str, Any]) -> AuthResult:
        """Write profile updates and merge them into the held user."""
        if self.user is None:
            return AuthResult(error=NO_USER_ERROR)

        try:
            await self._backend.table("users").update(updates).eq("id", self.user.id).execute()
        except BackendError as e:
            logger.warning("profile_update_failed", user_id=self.user.id, error=e.message)
            return AuthResult(error=e.message)

        await self._set_user(self.user.model_copy(update=updates))
        logger.info("profile_updated", user_id=self.user.id, fields=sorted(updates))
        return AuthResult()
