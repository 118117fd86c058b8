"""In-memory session registry."""
from __future__ import annotations

from zcode_stage.core.errors import Unauthorized
from zcode_stage.core.security import new_token
from zcode_stage.models.identity import Session

__all__ = ["SessionRepository"]


class SessionRepository:
    """Maps opaque tokens to sessions. Sessions never expire."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def create(self, identity_id: str, *, is_admin: bool = False) -> Session:
        """Issue a new token for ``identity_id``."""
        token = new_token()
        # uuid4 collisions are negligible but never overwrite a live session.
        while token in self._sessions:
            token = new_token()
        session = Session(token=token, identity_id=identity_id, is_admin=is_admin)
        self._sessions[token] = session
        return session

    def resolve(self, token: str | None) -> Session:
        """Return the session for ``token``.

        Raises:
            Unauthorized: If the token is missing or unknown.
        """
        if not token:
            raise Unauthorized("Unauthorized")
        session = self._sessions.get(token)
        if session is None:
            raise Unauthorized("Unauthorized")
        return session
