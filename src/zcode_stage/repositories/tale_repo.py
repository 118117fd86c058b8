"""In-memory storage for tales."""
from __future__ import annotations

import itertools

from zcode_stage.core.errors import NotFound
from zcode_stage.core.security import new_id
from zcode_stage.models.tale import MediaKind, Tale, TaleState

__all__ = ["TaleRepository"]


class TaleRepository:
    """Tale records in submission order.

    The repository never changes a tale's moderation state; that is the
    moderation service's job.
    """

    def __init__(self) -> None:
        self._tales: dict[str, Tale] = {}
        self._order_counter = itertools.count(start=1)

    def create(
        self,
        *,
        owner_id: str,
        media_payload: str,
        media_kind: MediaKind,
        caption: str,
    ) -> Tale:
        """Insert a new pending tale and return it."""
        tale = Tale(
            id=new_id(),
            owner_id=owner_id,
            media_payload=media_payload,
            media_kind=media_kind,
            caption=caption,
            order_index=next(self._order_counter),
        )
        self._tales[tale.id] = tale
        return tale

    def get_by_id(self, tale_id: str) -> Tale | None:
        """Return a tale by identifier."""
        return self._tales.get(tale_id)

    def require(self, tale_id: str) -> Tale:
        """Return a tale by identifier or raise ``NotFound``."""
        tale = self._tales.get(tale_id)
        if tale is None:
            raise NotFound("Tale not found")
        return tale

    def _newest_first(self, tales: list[Tale]) -> list[Tale]:
        return sorted(tales, key=lambda t: t.order_index, reverse=True)

    def list_in_state(self, state: TaleState) -> list[Tale]:
        """Return tales in ``state`` sorted by descending order index."""
        return self._newest_first([t for t in self._tales.values() if t.state is state])

    def list_by_owner(self, owner_id: str) -> list[Tale]:
        """Return every tale owned by ``owner_id``, newest first."""
        return self._newest_first([t for t in self._tales.values() if t.owner_id == owner_id])

    def increment_reposts(self, tale_id: str, delta: int = 1) -> Tale:
        """Increment the repost counter for a tale."""
        tale = self.require(tale_id)
        tale.repost_count += delta
        return tale
