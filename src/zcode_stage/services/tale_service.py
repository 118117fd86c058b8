"""Service-level helpers for submitting, listing and reposting tales."""
from __future__ import annotations

import logging

from zcode_stage.core.errors import InvalidInput, NotFound
from zcode_stage.core.settings import Settings
from zcode_stage.models.tale import MediaKind, Tale, TaleState
from zcode_stage.repositories.identity_repo import IdentityRepository
from zcode_stage.repositories.tale_repo import TaleRepository

logger = logging.getLogger(__name__)


class TaleService:
    """Content store operations on behalf of authenticated identities."""

    def __init__(
        self,
        tales: TaleRepository,
        identities: IdentityRepository,
        settings: Settings,
    ) -> None:
        self._tales = tales
        self._identities = identities
        self._settings = settings

    def submit_tale(
        self,
        owner_id: str,
        media_payload: str,
        media_kind: MediaKind | str,
        caption: str | None = None,
    ) -> Tale:
        """Create a pending tale for ``owner_id``.

        The owner earns the submission reward straight away, whatever the
        moderation outcome.

        Raises:
            InvalidInput: If the payload or kind is missing or invalid
            NotFound: If the owner does not exist
        """
        owner = self._identities.require(owner_id)
        if not media_payload:
            raise InvalidInput("Media payload is required")
        if len(media_payload.encode("utf-8")) > self._settings.max_media_payload_bytes:
            raise InvalidInput("Media payload is too large")
        if not media_kind:
            raise InvalidInput("Media kind is required")
        try:
            kind = MediaKind(media_kind)
        except ValueError as exc:
            raise InvalidInput("Media kind must be 'image' or 'video'") from exc
        caption = caption or ""
        if len(caption) > self._settings.max_caption_length:
            raise InvalidInput(
                f"Caption exceeds {self._settings.max_caption_length} characters"
            )

        tale = self._tales.create(
            owner_id=owner.id,
            media_payload=media_payload,
            media_kind=kind,
            caption=caption,
        )
        owner.owned_tale_ids.append(tale.id)
        self._identities.award_points(owner.id, self._settings.submission_reward)
        logger.info("Tale %s submitted by %s, awaiting approval", tale.id, owner.id)
        return tale

    def list_approved_feed(self) -> list[Tale]:
        """Return approved tales, newest first."""
        return self._tales.list_in_state(TaleState.APPROVED)

    def list_own_tales(self, owner_id: str) -> list[Tale]:
        """Return every tale ``owner_id`` submitted, pending ones included."""
        return self._tales.list_by_owner(owner_id)

    def get_visible_tale(self, tale_id: str, viewer_id: str | None = None) -> Tale:
        """Return a tale if the viewer may see it.

        Pending tales are only visible to their owner; to anyone else they
        do not exist.
        """
        tale = self._tales.get_by_id(tale_id)
        if tale is None or (not tale.approved and tale.owner_id != viewer_id):
            raise NotFound("Tale not found")
        return tale

    def repost(self, identity_id: str, tale_id: str) -> Tale:
        """Increment the repost counter of an approved tale.

        Raises:
            NotFound: If the tale is unknown or still pending
        """
        tale = self._tales.get_by_id(tale_id)
        if tale is None or not tale.approved:
            raise NotFound("Tale not found")
        self._tales.increment_reposts(tale.id)
        logger.debug("Identity %s reposted tale %s", identity_id, tale.id)
        return tale
