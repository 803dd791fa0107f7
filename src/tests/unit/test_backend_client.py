"""Unit tests for the backend client and its query builder."""

from unittest.mock import AsyncMock

import httpx
import pytest

from agenda_service.backend import (
    AuthError,
    AuthEvent,
    BackendClient,
    BackendError,
)
from tests.fixtures import FakeBackend


class TestBackendError:
    """Tests for error decoding."""

    def test_postgrest_error(self) -> None:
        response = httpx.Response(409, json={"message": "duplicate key", "code": "23505"})

        error = BackendError.from_response(response)

        assert error.status == 409
        assert error.message == "duplicate key"
        assert error.code == "23505"

    def test_gotrue_error(self) -> None:
        response = httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})

        error = BackendError.from_response(response)

        assert error.message == "Invalid login credentials"

    def test_non_json_body(self) -> None:
        error = BackendError.from_response(httpx.Response(502, text="<html>bad gateway</html>"))

        assert error.status == 502
        assert error.message == "Bad Gateway"
        assert error.to_dict() == {"message": "Bad Gateway", "status": 502, "code": None}


class TestTableQuery:
    """Tests for request building and execution."""

    def test_select_params(self, backend_client: BackendClient) -> None:
        query = backend_client.table("tasks").select().eq("user_id", "u1").order("created_at", ascending=False)

        assert query.build_params() == [("select", "*"), ("user_id", "eq.u1"), ("order", "created_at.desc")]

    def test_eq_formats_booleans(self, backend_client: BackendClient) -> None:
        query = backend_client.table("calendars").select().eq("is_default", True)

        assert ("is_default", "eq.true") in query.build_params()

    def test_delete_has_no_select(self, backend_client: BackendClient) -> None:
        assert backend_client.table("tasks").delete().eq("id", "1").build_params() == [("id", "eq.1")]

    async def test_select_sends_headers(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        fake_backend.seed("tasks", user_id="u1", calendar_id="c1", title="A")

        rows = await backend_client.table("tasks").select().eq("user_id", "u1").execute()

        assert [row["title"] for row in rows] == ["A"]
        request = fake_backend.requests[-1]
        assert request.headers["apikey"] == "anon-key-for-tests"
        assert request.headers["authorization"] == "Bearer anon-key-for-tests"
        assert "prefer" not in request.headers

    async def test_insert_returns_representation(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        row = await backend_client.table("calendars").insert({"user_id": "u1", "name": "Home"}).select().single().execute()

        assert row["name"] == "Home"
        assert row["id"]
        request = fake_backend.requests[-1]
        assert request.method == "POST"
        assert request.headers["prefer"] == "return=representation"

    async def test_update_and_delete(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        row = fake_backend.seed("tasks", user_id="u1", calendar_id="c1", title="Old")

        await backend_client.table("tasks").update({"title": "New"}).eq("id", row["id"]).execute()
        assert fake_backend.rows("tasks")[0]["title"] == "New"

        await backend_client.table("tasks").delete().eq("id", row["id"]).execute()
        assert fake_backend.rows("tasks") == []

    async def test_single_requires_exactly_one_row(self, backend_client: BackendClient) -> None:
        with pytest.raises(BackendError) as exc_info:
            await backend_client.table("users").select().eq("id", "nobody").single().execute()

        assert exc_info.value.status == 406
        assert exc_info.value.code == "PGRST116"

    async def test_order_applied(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        for title in ("first", "second", "third"):
            fake_backend.seed("tasks", user_id="u1", calendar_id="c1", title=title)

        rows = await backend_client.table("tasks").select().order("created_at", ascending=False).execute()

        assert [row["title"] for row in rows] == ["third", "second", "first"]

    async def test_error_response_raises(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        fake_backend.fail("tasks", "GET", status=500, message="database down")

        with pytest.raises(BackendError) as exc_info:
            await backend_client.table("tasks").select().execute()

        assert exc_info.value.status == 500
        assert exc_info.value.message == "database down"


class TestTransportFailures:
    """Tests for network level errors."""

    async def test_transport_error_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = BackendClient("http://backend.test", "anon", transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(BackendError) as exc_info:
                await client.table("tasks").select().execute()
        finally:
            await client.close()

        assert exc_info.value.status == 0
        assert "connection refused" in exc_info.value.message

    async def test_health_check(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        assert await backend_client.health_check() is True

        fake_backend.healthy = False
        assert await backend_client.health_check() is False


class TestAuthClient:
    """Tests for sign-up, sign-in, sign-out and auth events."""

    async def test_sign_in_sets_session_and_bearer(
        self,
        backend_client: BackendClient,
        fake_backend: FakeBackend,
    ) -> None:
        user_id = fake_backend.add_account("ana@example.com", "secret-password")
        callback = AsyncMock()
        backend_client.auth.on_auth_state_change(callback)

        response = await backend_client.auth.sign_in_with_password("ana@example.com", "secret-password")

        assert response.session is not None
        assert response.session.user.id == user_id
        assert await backend_client.auth.get_session() == response.session
        callback.assert_awaited_once_with(AuthEvent.SIGNED_IN, response.session)

        await backend_client.table("users").select().execute()
        assert fake_backend.requests[-1].headers["authorization"] == f"Bearer {response.session.access_token}"

    async def test_sign_in_invalid_credentials(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        fake_backend.add_account("ana@example.com", "secret-password")

        with pytest.raises(AuthError) as exc_info:
            await backend_client.auth.sign_in_with_password("ana@example.com", "wrong")

        assert exc_info.value.message == "Invalid login credentials"
        assert await backend_client.auth.get_session() is None

    async def test_sign_up_with_auto_confirm(self, backend_client: BackendClient) -> None:
        response = await backend_client.auth.sign_up("new@example.com", "secret-password")

        assert response.user is not None
        assert response.session is not None

    async def test_sign_up_pending_confirmation(self, fake_backend: FakeBackend) -> None:
        fake_backend.auto_confirm = False
        client = BackendClient("http://backend.test", "anon", transport=fake_backend.transport)
        try:
            response = await client.auth.sign_up("new@example.com", "secret-password")
        finally:
            await client.close()

        assert response.user is not None
        assert response.session is None

    async def test_sign_up_existing_user(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        fake_backend.add_account("ana@example.com", "secret-password")

        with pytest.raises(AuthError) as exc_info:
            await backend_client.auth.sign_up("ana@example.com", "secret-password")

        assert exc_info.value.code == "user_already_exists"

    async def test_sign_out_clears_session(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        fake_backend.add_account("ana@example.com", "secret-password")
        await backend_client.auth.sign_in_with_password("ana@example.com", "secret-password")
        callback = AsyncMock()
        backend_client.auth.on_auth_state_change(callback)

        await backend_client.auth.sign_out()

        assert await backend_client.auth.get_session() is None
        callback.assert_awaited_once_with(AuthEvent.SIGNED_OUT, None)
        assert fake_backend.requests[-1].url.path == "/auth/v1/logout"

    async def test_unsubscribe(self, backend_client: BackendClient, fake_backend: FakeBackend) -> None:
        fake_backend.add_account("ana@example.com", "secret-password")
        callback = AsyncMock()
        subscription = backend_client.auth.on_auth_state_change(callback)
        subscription.unsubscribe()
        subscription.unsubscribe()

        await backend_client.auth.sign_in_with_password("ana@example.com", "secret-password")

        callback.assert_not_awaited()
