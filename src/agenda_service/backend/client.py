"""Async client for the hosted auth + table backend.

The backend speaks the GoTrue (``/auth/v1``) and PostgREST (``/rest/v1``)
wire protocols. Requests carry the anonymous key in the ``apikey`` header
and, once signed in, the user's access token as the bearer token.
"""

import time
from enum import Enum
from typing import Any, Awaitable, Callable

import httpx
from pydantic import BaseModel, ConfigDict

from agenda_service.backend.errors import AuthError, BackendError
from agenda_service.utils.logging import get_logger
from agenda_service.utils.metrics import get_metrics

logger = get_logger(__name__)
metrics = get_metrics()

AUTH_PATH = "/auth/v1"
REST_PATH = "/rest/v1"


class AuthEvent(str, Enum):
    """Auth state change events delivered to subscribers."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    USER_UPDATED = "USER_UPDATED"


class AuthUser(BaseModel):
    """The identity part of a GoTrue user."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None


class BackendSession(BaseModel):
    """A signed-in session."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    user: AuthUser


class AuthResponse(BaseModel):
    """Result of sign-up or sign-in. ``session`` is None when confirmation is pending."""

    user: AuthUser | None = None
    session: BackendSession | None = None


AuthCallback = Callable[[AuthEvent, BackendSession | None], Awaitable[None]]


class Subscription:
    """Handle returned by ``on_auth_state_change``."""

    def __init__(self, owner: "AuthClient", callback: AuthCallback) -> None:
        self._owner = owner
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._owner._subscriptions.remove(self)
            self.active = False


class AuthClient:
    """GoTrue endpoints plus the locally held session."""

    def __init__(self, backend: "BackendClient") -> None:
        self._backend = backend
        self._session: BackendSession | None = None
        self._subscriptions: list[Subscription] = []

    @property
    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    async def sign_up(self, email: str, password: str) -> AuthResponse:
        """Register a new account.

        Raises:
            AuthError: If the backend rejects the sign-up
        """
        data = await self._call("sign_up", "POST", "/signup", json={"email": email, "password": password})
        response = _parse_auth_payload(data)
        if response.session is not None:
            await self._set_session(AuthEvent.SIGNED_IN, response.session)
        logger.info("auth_signed_up", user_id=response.user.id if response.user else None)
        return response

    async def sign_in_with_password(self, email: str, password: str) -> AuthResponse:
        """Exchange email + password for a session.

        Raises:
            AuthError: On invalid credentials or other auth failures
        """
        data = await self._call(
            "sign_in",
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        response = _parse_auth_payload(data)
        if response.session is None:
            raise AuthError("Sign-in returned no session", status=500)
        await self._set_session(AuthEvent.SIGNED_IN, response.session)
        logger.info("auth_signed_in", user_id=response.session.user.id)
        return response

    async def sign_out(self) -> None:
        """End the session. The local session is cleared even if the backend call fails."""
        if self._session is not None:
            try:
                await self._call("sign_out", "POST", "/logout")
            except BackendError as e:
                logger.warning("auth_sign_out_failed", error=e.message, status=e.status)
        await self._set_session(AuthEvent.SIGNED_OUT, None)
        logger.info("auth_signed_out")

    async def get_session(self) -> BackendSession | None:
        return self._session

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        """Subscribe to auth state changes."""
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    async def _set_session(self, event: AuthEvent, session: BackendSession | None) -> None:
        self._session = session
        await self._emit(event, session)

    async def _emit(self, event: AuthEvent, session: BackendSession | None) -> None:
        for subscription in list(self._subscriptions):
            await subscription.callback(event, session)

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        try:
            return await self._backend.request(
                "auth", operation, method, f"{AUTH_PATH}{path}", params=params, json=json
            )
        except BackendError as e:
            if isinstance(e, AuthError):
                raise
            raise AuthError(e.message, status=e.status, code=e.code) from e


def _parse_auth_payload(data: Any) -> AuthResponse:
    """Normalize GoTrue responses.

    Sign-in always returns a session object; sign-up returns either a
    session (auto-confirm) or the bare user (confirmation pending).
    """
    if not isinstance(data, dict):
        return AuthResponse()
    if "access_token" in data:
        session = BackendSession.model_validate(data)
        return AuthResponse(user=session.user, session=session)
    user_data = data.get("user") if isinstance(data.get("user"), dict) else data
    if "id" in user_data:
        return AuthResponse(user=AuthUser.model_validate(user_data))
    return AuthResponse()


class TableQuery:
    """Builder for one PostgREST request.

    Usage mirrors the hosted backend's client library::

        rows = await client.table("tasks").select().eq("user_id", uid).order("created_at", ascending=False).execute()
        row = await client.table("calendars").insert({...}).select().single().execute()
    """

    def __init__(self, client: "BackendClient", table: str) -> None:
        self._client = client
        self.table = table
        self._operation = "select"
        self._method = "GET"
        self._body: Any = None
        self._columns: str | None = None
        self._filters: list[tuple[str, str]] = []
        self._orders: list[str] = []
        self._single = False

    def select(self, columns: str = "*") -> "TableQuery":
        """Select columns. After insert/update this requests the written rows back."""
        self._columns = columns
        return self

    def insert(self, values: dict[str, Any] | list[dict[str, Any]]) -> "TableQuery":
        self._operation, self._method, self._body = "insert", "POST", values
        return self

    def update(self, values: dict[str, Any]) -> "TableQuery":
        self._operation, self._method, self._body = "update", "PATCH", values
        return self

    def delete(self) -> "TableQuery":
        self._operation, self._method, self._body = "delete", "DELETE", None
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"eq.{_format_value(value)}"))
        return self

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self._orders.append(f"{column}.{'asc' if ascending else 'desc'}")
        return self

    def single(self) -> "TableQuery":
        """Expect exactly one row; ``execute`` then returns a dict."""
        self._single = True
        return self

    def build_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self._columns is not None or self._operation == "select":
            params.append(("select", self._columns or "*"))
        params.extend(self._filters)
        if self._orders:
            params.append(("order", ",".join(self._orders)))
        return params

    async def execute(self) -> list[dict[str, Any]] | dict[str, Any]:
        """Send the request.

        Returns:
            List of rows, or a single row when ``single()`` was requested

        Raises:
            BackendError: On a failed response, or when ``single()`` did not
                match exactly one row
        """
        headers: dict[str, str] = {}
        if self._operation != "select":
            headers["Prefer"] = "return=representation"

        data = await self._client.request(
            self.table,
            self._operation,
            self._method,
            f"{REST_PATH}/{self.table}",
            params=self.build_params(),
            json=self._body,
            headers=headers,
        )
        rows: list[dict[str, Any]]
        if data is None:
            rows = []
        elif isinstance(data, list):
            rows = data
        else:
            rows = [data]

        if self._single:
            if len(rows) != 1:
                raise BackendError(
                    "JSON object requested, multiple (or no) rows returned",
                    status=406,
                    code="PGRST116",
                )
            return rows[0]
        return rows


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class BackendClient:
    """Client for the hosted backend.

    Provides:
    - ``table(name)`` query builders for the relational tables
    - ``auth`` for sign-up, sign-in, sign-out and session change events
    """

    def __init__(
        self,
        url: str,
        anon_key: Any,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the backend client.

        Args:
            url: Backend base URL
            anon_key: Anonymous API key (str or SecretStr)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.anon_key = anon_key.get_secret_value() if hasattr(anon_key, "get_secret_value") else anon_key
        self.url = url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=self.url,
            timeout=httpx.Timeout(timeout),
            headers={
                "apikey": self.anon_key,
                "Content-Type": "application/json",
            },
            transport=transport,
        )
        self.auth = AuthClient(self)

        logger.info("backend_client_initialized", url=self.url)

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    async def request(
        self,
        resource: str,
        operation: str,
        method: str,
        path: str,
        params: Any = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send one request and decode the JSON body.

        Raises:
            BackendError: On a non-2xx response or a transport failure
        """
        request_headers = {"Authorization": f"Bearer {self.auth.access_token or self.anon_key}"}
        if headers:
            request_headers.update(headers)

        start_time = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=request_headers,
            )
        except httpx.HTTPError as e:
            duration = time.perf_counter() - start_time
            metrics.record_backend_request(resource, operation, "error", duration)
            logger.error("backend_transport_error", resource=resource, operation=operation, error=str(e))
            raise BackendError(str(e) or type(e).__name__) from e

        duration = time.perf_counter() - start_time
        if response.is_error:
            metrics.record_backend_request(resource, operation, "error", duration)
            error = BackendError.from_response(response)
            logger.warning(
                "backend_request_failed",
                resource=resource,
                operation=operation,
                status=response.status_code,
                error=error.message,
            )
            raise error

        metrics.record_backend_request(resource, operation, "success", duration)
        logger.debug(
            "backend_request_complete",
            resource=resource,
            operation=operation,
            status=response.status_code,
            duration_ms=int(duration * 1000),
        )
        if not response.content:
            return None
        return response.json()

    async def health_check(self) -> bool:
        """Check that the auth service answers."""
        try:
            await self.request("auth", "health", "GET", f"{AUTH_PATH}/health")
        except BackendError as e:
            logger.warning("backend_health_check_failed", error=e.message)
            return False
        return True

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
        logger.info("backend_client_closed")
