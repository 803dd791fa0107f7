"""Backend error types."""

from typing import Any

import httpx


class BackendError(Exception):
    """A request to the hosted backend failed.

    Attributes:
        status: HTTP status code (0 when no response was received)
        message: Human readable error message
        code: Backend error code, when the backend sent one
    """

    def __init__(self, message: str, status: int = 0, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "status": self.status, "code": self.code}

    @classmethod
    def from_response(cls, response: httpx.Response) -> "BackendError":
        """Build an error from a failed PostgREST or GoTrue response."""
        message = response.reason_phrase or f"HTTP {response.status_code}"
        code: str | None = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            # PostgREST sends message/code; GoTrue sends msg or error_description, and error_code.
            message = (
                body.get("message")
                or body.get("msg")
                or body.get("error_description")
                or body.get("error")
                or message
            )
            raw_code = body.get("error_code") or body.get("code")
            code = str(raw_code) if raw_code is not None else None
        return cls(str(message), status=response.status_code, code=code)


class AuthError(BackendError):
    """An auth endpoint rejected the request."""
