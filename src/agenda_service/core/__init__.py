"""Application core: session, controller and presentation logic."""

from agenda_service.core.context import AppContext
from agenda_service.core.controller import AgendaApp
from agenda_service.core.session import AuthResult, AuthSession
from agenda_service.core.toasts import ToastCenter
from agenda_service.core.tutorial import Tutorial

__all__ = [
    "AgendaApp",
    "AppContext",
    "AuthResult",
    "AuthSession",
    "ToastCenter",
    "Tutorial",
]
