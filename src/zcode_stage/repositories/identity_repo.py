"""In-memory storage for identities."""
from __future__ import annotations

from zcode_stage.core.errors import Conflict, NotFound
from zcode_stage.core.security import new_id
from zcode_stage.models.identity import Identity

__all__ = ["IdentityRepository"]


class IdentityRepository:
    """Identity records keyed by generated id, with a display-name index."""

    def __init__(self) -> None:
        self._by_id: dict[str, Identity] = {}
        self._id_by_name: dict[str, str] = {}

    def __contains__(self, identity_id: object) -> bool:
        return identity_id in self._by_id

    def create(
        self,
        *,
        display_name: str,
        avatar: str,
        credential_secret: str | None = None,
    ) -> Identity:
        """Insert a new identity with zeroed counters.

        Raises:
            Conflict: If the display name is already registered.
        """
        if display_name in self._id_by_name:
            raise Conflict("User exists")
        identity = Identity(
            id=new_id(),
            display_name=display_name,
            avatar=avatar,
            credential_secret=credential_secret,
        )
        self._by_id[identity.id] = identity
        self._id_by_name[display_name] = identity.id
        return identity

    def require(self, identity_id: str) -> Identity:
        """Return an identity by id or raise ``NotFound``."""
        identity = self._by_id.get(identity_id)
        if identity is None:
            raise NotFound("User not found")
        return identity

    def get_by_display_name(self, display_name: str) -> Identity | None:
        """Return the identity currently using ``display_name``."""
        identity_id = self._id_by_name.get(display_name)
        return self._by_id.get(identity_id) if identity_id else None

    def rename(self, identity: Identity, display_name: str) -> Identity:
        """Change an identity's display name, keeping the name index in step."""
        if display_name == identity.display_name:
            return identity
        if display_name in self._id_by_name:
            raise Conflict("Display name already taken")
        del self._id_by_name[identity.display_name]
        identity.display_name = display_name
        self._id_by_name[display_name] = identity.id
        return identity

    def list_all(self) -> list[Identity]:
        """Return identities in registration order."""
        return list(self._by_id.values())

    def award_points(self, identity_id: str, amount: int) -> int:
        """Add ``amount`` to an identity's points and return the new total."""
        identity = self.require(identity_id)
        identity.points += amount
        return identity.points
