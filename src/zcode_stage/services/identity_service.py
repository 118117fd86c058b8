"""Registration, login, profile and follow operations."""
from __future__ import annotations

import logging

from zcode_stage.core import security
from zcode_stage.core.errors import (
    Conflict,
    Forbidden,
    InvalidCredential,
    InvalidInput,
    Unauthorized,
)
from zcode_stage.core.settings import Settings
from zcode_stage.models.identity import Identity, Session
from zcode_stage.repositories.identity_repo import IdentityRepository
from zcode_stage.repositories.session_repo import SessionRepository

__all__ = ["ADMIN_IDENTITY_ID", "IdentityService"]

logger = logging.getLogger(__name__)

# Sessions for the operator carry this id; no Identity record ever uses it.
ADMIN_IDENTITY_ID = "admin"


class IdentityService:
    """Account operations built on the identity store and session registry."""

    def __init__(
        self,
        identities: IdentityRepository,
        sessions: SessionRepository,
        settings: Settings,
    ) -> None:
        self._identities = identities
        self._sessions = sessions
        self._settings = settings

    def register(
        self,
        display_name: str,
        avatar: str | None = None,
        credential: str | None = None,
    ) -> Identity:
        """Create a new identity.

        Raises:
            InvalidInput: If the display name is blank
            Conflict: If the name is taken or reserved for the operator
        """
        display_name = (display_name or "").strip()
        if not display_name:
            raise InvalidInput("Missing username")
        if display_name == self._settings.admin_username:
            raise Conflict("User exists")
        identity = self._identities.create(
            display_name=display_name,
            avatar=avatar or self._settings.default_avatar,
            credential_secret=security.hash_key(credential) if credential else None,
        )
        logger.info("Registered identity %s (%s)", identity.id, identity.display_name)
        return identity

    def authenticate(self, display_name: str, credential: str | None = None) -> Session:
        """Check a login and open a new session.

        The operator name is checked against the configured secret and yields
        an admin session that owns no tales.

        Raises:
            InvalidCredential: If the name is unknown or the credential is wrong
        """
        display_name = (display_name or "").strip()
        if display_name == self._settings.admin_username:
            return self.login_admin(credential)

        identity = self._identities.get_by_display_name(display_name)
        if identity is None and display_name and self._settings.auto_register_on_login:
            identity = self.register(display_name, credential=credential)
        if identity is None or not security.verify_key(credential, identity.credential_secret):
            raise InvalidCredential("Invalid credentials")

        session = self._sessions.create(identity.id)
        logger.info("Identity %s logged in", identity.id)
        return session

    def login_admin(self, credential: str | None) -> Session:
        """Open an operator session.

        Raises:
            InvalidCredential: If the secret does not match
        """
        if not security.verify_admin_secret(credential, self._settings.admin_secret):
            raise InvalidCredential("Invalid credentials")
        logger.info("Operator logged in")
        return self._sessions.create(ADMIN_IDENTITY_ID, is_admin=True)

    def resolve_session(self, token: str | None) -> Session:
        """Return a live session, failing closed on orphaned tokens.

        Raises:
            Unauthorized: If the token is unknown or its identity is gone
        """
        session = self._sessions.resolve(token)
        if not session.is_admin and session.identity_id not in self._identities:
            raise Unauthorized("User not found")
        return session

    def resolve_identity(self, token: str | None) -> Identity:
        """Return the identity behind a user token.

        Raises:
            Unauthorized: If the token is invalid or orphaned
            Forbidden: If the token belongs to the operator, who has no profile
        """
        session = self.resolve_session(token)
        if session.is_admin:
            raise Forbidden("Operator sessions have no profile")
        return self._identities.require(session.identity_id)

    def resolve_admin(self, token: str | None) -> Session:
        """Return the operator session behind ``token``.

        Raises:
            Unauthorized: If the token is invalid
            Forbidden: If the token belongs to a regular identity
        """
        session = self.resolve_session(token)
        if not session.is_admin:
            raise Forbidden("Forbidden")
        return session

    def update_profile(
        self,
        identity_id: str,
        *,
        bio: str | None = None,
        avatar: str | None = None,
        display_name: str | None = None,
    ) -> Identity:
        """Apply a partial profile update; ``None`` fields stay unchanged."""
        identity = self._identities.require(identity_id)
        if display_name is not None:
            display_name = display_name.strip()
            if not display_name:
                raise InvalidInput("Display name must not be blank")
            if display_name == self._settings.admin_username:
                raise Conflict("Display name already taken")
            self._identities.rename(identity, display_name)
        if bio is not None:
            identity.bio = bio
        if avatar is not None:
            identity.avatar = avatar
        return identity

    def follow(self, follower_id: str, followee_id: str) -> Identity:
        """Make ``follower_id`` follow ``followee_id``. Repeat calls are no-ops.

        Returns:
            The follower identity
        """
        if follower_id == followee_id:
            raise InvalidInput("You cannot follow yourself")
        follower = self._identities.require(follower_id)
        followee = self._identities.require(followee_id)
        follower.following_ids.add(followee.id)
        followee.follower_ids.add(follower.id)
        return follower

    def unfollow(self, follower_id: str, followee_id: str) -> Identity:
        """Undo a follow. Unfollowing someone not followed is a no-op."""
        follower = self._identities.require(follower_id)
        followee = self._identities.require(followee_id)
        follower.following_ids.discard(followee.id)
        followee.follower_ids.discard(follower.id)
        return follower

    def directory(self) -> list[Identity]:
        """Return every identity in registration order. The operator never appears."""
        return self._identities.list_all()
