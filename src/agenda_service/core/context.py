"""Application context: builds and wires the long-lived objects."""

import httpx

from agenda_service.backend import BackendClient
from agenda_service.config import Settings
from agenda_service.core.controller import AgendaApp
from agenda_service.core.session import AuthSession
from agenda_service.core.toasts import ToastCenter
from agenda_service.i18n import Language, LanguagePreferenceStore, Translator
from agenda_service.utils.logging import get_logger

logger = get_logger(__name__)


class AppContext:
    """Explicitly constructed holder of everything a running app needs.

    ``initialize()`` restores the saved language and the auth session and
    connects the controller to user changes; ``teardown()`` undoes it.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Build the context.

        Args:
            settings: Application settings
            transport: Optional httpx transport for the backend client
        """
        self.settings = settings
        self.backend = BackendClient(
            url=settings.backend_url,
            anon_key=settings.backend_anon_key,
            timeout=settings.backend_timeout_seconds,
            transport=transport,
        )
        self.language_store = LanguagePreferenceStore(settings.state_path)
        self.translator = Translator(settings.default_language or Language.ES)
        self.toasts = ToastCenter(default_duration=settings.toast_duration_seconds)
        self.session = AuthSession(self.backend)
        self.app = AgendaApp(
            backend=self.backend,
            session=self.session,
            translator=self.translator,
            toasts=self.toasts,
            upcoming_limit=settings.upcoming_events_limit,
            live_search_min_length=settings.live_search_min_length,
        )
        self.initialized = False

    async def initialize(self) -> None:
        language = self.language_store.initial_language(self.settings.default_language)
        self.translator.set_language(language)
        self.session.on_user_change(self.app.handle_user_change)
        await self.session.initialize()
        self.initialized = True
        logger.info("app_context_initialized", language=language.value)

    def set_language(self, language: Language | str) -> Language:
        """Switch the interface language and persist the choice."""
        selected = Language(language)
        self.translator.set_language(selected)
        self.language_store.save(selected)
        return selected

    async def teardown(self) -> None:
        self.session.teardown()
        await self.backend.close()
        self.initialized = False
        logger.info("app_context_closed")
