"""Hosted backend access (auth + tables)."""

from agenda_service.backend.client import (
    AuthClient,
    AuthEvent,
    AuthResponse,
    AuthUser,
    BackendClient,
    BackendSession,
    Subscription,
    TableQuery,
)
from agenda_service.backend.errors import AuthError, BackendError

__all__ = [
    "AuthClient",
    "AuthError",
    "AuthEvent",
    "AuthResponse",
    "AuthUser",
    "BackendClient",
    "BackendError",
    "BackendSession",
    "Subscription",
    "TableQuery",
]
