"""Pytest fixtures for the agenda service tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from pydantic import SecretStr

from agenda_service.backend import BackendClient
from agenda_service.config import Settings
from agenda_service.core.context import AppContext
from agenda_service.i18n import Translator
from tests.fixtures import TEST_EMAIL, TEST_PASSWORD, FakeBackend, ModelFactory


@pytest.fixture(autouse=True)
def reset_factories() -> None:
    ModelFactory.reset()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Create test settings pointing at the fake backend."""
    return Settings(
        backend_url="http://backend.test",
        backend_anon_key=SecretStr("anon-key-for-tests"),
        state_path=str(tmp_path / "state.json"),
        default_language="es",
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def translator() -> Translator:
    return Translator("es")


@pytest.fixture
async def backend_client(fake_backend: FakeBackend) -> AsyncGenerator[BackendClient, None]:
    """Backend client wired to the fake backend."""
    client = BackendClient(
        url="http://backend.test",
        anon_key=SecretStr("anon-key-for-tests"),
        transport=fake_backend.transport,
    )
    yield client
    await client.close()


@pytest.fixture
def context(test_settings: Settings, fake_backend: FakeBackend) -> AppContext:
    """Application context wired to the fake backend (not initialized)."""
    return AppContext(test_settings, transport=fake_backend.transport)


@pytest.fixture
async def signed_in(context: AppContext, fake_backend: FakeBackend) -> AsyncGenerator[AppContext, None]:
    """Initialized context with a signed-in user who has a default calendar."""
    user_id = fake_backend.add_account(TEST_EMAIL, TEST_PASSWORD, full_name="Ana García")
    fake_backend.seed("calendars", id="cal-1", user_id=user_id, name="Personal", is_default=True)
    fake_backend.seed("calendars", id="cal-2", user_id=user_id, name="Trabajo", color="bg-green-500")
    await context.initialize()
    result = await context.session.sign_in(TEST_EMAIL, TEST_PASSWORD)
    assert result.ok
    yield context
    await context.teardown()
