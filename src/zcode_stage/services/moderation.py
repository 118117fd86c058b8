# src/zcode_stage/services/moderation.py
"""Moderation gate: the only code that moves a tale from pending to approved."""

from __future__ import annotations

import logging

from zcode_stage.core.errors import Forbidden
from zcode_stage.core.settings import Settings
from zcode_stage.core.time import utcnow
from zcode_stage.models.identity import Session
from zcode_stage.models.tale import Tale, TaleState
from zcode_stage.repositories.identity_repo import IdentityRepository
from zcode_stage.repositories.tale_repo import TaleRepository
from zcode_stage.schemas.channel import TaleApprovedFrame
from zcode_stage.schemas.tale import TaleResponse
from zcode_stage.services.presence import PresenceDirectory

logger = logging.getLogger(__name__)


class ModerationService:
    """Service handling moderation review and the approval transition."""

    def __init__(
        self,
        tales: TaleRepository,
        identities: IdentityRepository,
        presence: PresenceDirectory,
        settings: Settings,
    ) -> None:
        self._tales = tales
        self._identities = identities
        self._presence = presence
        self._settings = settings

    @staticmethod
    def ensure_admin(session: Session) -> None:
        """Raise ``Forbidden`` unless ``session`` is the operator session."""
        if not session.is_admin:
            raise Forbidden("Forbidden")

    def list_pending(self, session: Session) -> list[Tale]:
        """Return pending tales, newest first.

        Raises:
            Forbidden: If the caller is not the operator
        """
        self.ensure_admin(session)
        return self._tales.list_in_state(TaleState.PENDING)

    def mark_approved(self, tale_id: str) -> tuple[Tale, bool]:
        """Apply the pending -> approved transition.

        Returns:
            The tale and whether this call performed the transition. A tale
            that is already approved is returned unchanged with ``False``.

        Raises:
            NotFound: If the tale id is unknown
        """
        tale = self._tales.require(tale_id)
        if tale.state is TaleState.APPROVED:
            return tale, False

        tale.state = TaleState.APPROVED
        tale.approved_at = utcnow()
        if self._settings.approval_reward and tale.owner_id in self._identities:
            self._identities.award_points(tale.owner_id, self._settings.approval_reward)
        return tale, True

    async def approve(self, session: Session, tale_id: str) -> Tale:
        """Approve a tale and notify every live channel.

        Approval is idempotent. Only the call that performs the transition
        awards points and broadcasts ``tale_approved``.

        Raises:
            Forbidden: If the caller is not the operator
            NotFound: If the tale id is unknown
        """
        self.ensure_admin(session)
        tale, changed = self.mark_approved(tale_id)
        if changed:
            logger.info("Tale %s approved", tale.id)
            await self._presence.broadcast(
                TaleApprovedFrame(tale=TaleResponse.model_validate(tale))
            )
        else:
            logger.debug("Tale %s was already approved", tale.id)
        return tale
