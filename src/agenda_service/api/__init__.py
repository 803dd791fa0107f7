"""HTTP API."""

from agenda_service.api.http_server import create_http_server

__all__ = ["create_http_server"]
