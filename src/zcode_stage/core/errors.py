"""Domain exceptions shared by the stores, services and API layer.

Every failure the core reports derives from :class:`ZCodeError`. The API
layer converts these into JSON responses using ``status_code``; the
WebSocket channel converts them into ``error`` frames.
"""

from __future__ import annotations

from fastapi import status


class ZCodeError(Exception):
    """Base exception for all Z-Code domain failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_detail: str = "Request failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthorized(ZCodeError):
    """Raised when a session or admin token is missing or invalid."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class InvalidCredential(Unauthorized):
    """Raised when a login presents the wrong display name or credential."""

    default_detail = "Invalid credentials"


class Forbidden(ZCodeError):
    """Raised when an authenticated caller lacks the required privilege."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFound(ZCodeError):
    """Raised when a tale or identity id does not resolve."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InvalidParticipant(NotFound):
    """Raised when a chat names a sender or recipient that does not exist."""

    default_detail = "Unknown chat participant"


class Conflict(ZCodeError):
    """Raised when registering a display name that is already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "User exists"


class InvalidInput(ZCodeError):
    """Raised when a required field is missing or a value is out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class ChannelProtocolError(ZCodeError):
    """Raised when a WebSocket frame cannot be decoded or has an unknown type."""

    default_detail = "Malformed channel frame"
