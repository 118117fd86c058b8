# src/zcode_stage/services/messaging.py
"""Direct message routing over live channels."""

from __future__ import annotations

import logging
from collections import defaultdict

from zcode_stage.core.errors import InvalidInput, InvalidParticipant
from zcode_stage.core.security import new_id
from zcode_stage.core.settings import Settings
from zcode_stage.models.message import ChatMessage
from zcode_stage.repositories.identity_repo import IdentityRepository
from zcode_stage.schemas.channel import ChatDeliveryFrame
from zcode_stage.schemas.direct_message import ChatMessageResponse
from zcode_stage.services.presence import PresenceDirectory

logger = logging.getLogger(__name__)


class MessageRouter:
    """Routes directed chat messages and keeps per-conversation logs.

    Delivery is best-effort: a recipient who is offline at send time never
    receives the frame, even after reconnecting. The message is still kept
    in the conversation log.
    """

    def __init__(
        self,
        identities: IdentityRepository,
        presence: PresenceDirectory,
        settings: Settings,
    ) -> None:
        self._identities = identities
        self._presence = presence
        self._settings = settings
        self._logs: defaultdict[frozenset[str], list[ChatMessage]] = defaultdict(list)

    async def route(self, from_id: str, to_id: str, text: str) -> ChatMessage:
        """Record a message and push it to the recipient if they are online.

        Args:
            from_id: Sender identity id
            to_id: Recipient identity id
            text: Message body

        Returns:
            The recorded ChatMessage

        Raises:
            InvalidParticipant: If either id is not a known identity
            InvalidInput: If the text is empty or too long
        """
        if from_id not in self._identities:
            raise InvalidParticipant("Unknown sender")
        if to_id not in self._identities:
            raise InvalidParticipant("Recipient not found")
        if not text or not text.strip():
            raise InvalidInput("Message text is required")
        if len(text) > self._settings.max_message_length:
            raise InvalidInput(
                f"Message exceeds {self._settings.max_message_length} characters"
            )

        message = ChatMessage(id=new_id(), from_id=from_id, to_id=to_id, text=text)
        self._logs[message.conversation_key].append(message)
        self._identities.award_points(from_id, self._settings.message_reward)

        frame = ChatDeliveryFrame(message=ChatMessageResponse.model_validate(message))
        if not await self._presence.send(to_id, frame):
            logger.debug("Recipient %s offline; message %s kept in log only", to_id, message.id)
        return message

    def conversation(self, first_id: str, second_id: str) -> list[ChatMessage]:
        """Return the messages between two identities in send order."""
        return list(self._logs.get(frozenset((first_id, second_id)), ()))

    def conversations_for(self, identity_id: str) -> dict[str, list[ChatMessage]]:
        """Return every conversation ``identity_id`` takes part in, keyed by partner."""
        result: dict[str, list[ChatMessage]] = {}
        for key, messages in self._logs.items():
            if identity_id not in key:
                continue
            others = key - {identity_id}
            partner = next(iter(others)) if others else identity_id
            result[partner] = list(messages)
        return result
