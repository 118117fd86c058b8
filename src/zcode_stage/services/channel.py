# src/zcode_stage/services/channel.py
"""Frame handling for one persistent client channel.

A :class:`ChannelSession` wraps a single WebSocket. Every inbound text frame
goes through :meth:`ChannelSession.handle_text`; decoding or domain failures
are answered with an ``error`` frame and the channel stays open.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from zcode_stage.core.errors import ChannelProtocolError, ZCodeError
from zcode_stage.schemas.channel import (
    ChatAckFrame,
    ChatFrame,
    ErrorFrame,
    RegisterFrame,
    WelcomeFrame,
    inbound_frame_adapter,
)
from zcode_stage.schemas.direct_message import ChatMessageResponse
from zcode_stage.schemas.user import IdentitySummary
from zcode_stage.services.identity_service import IdentityService
from zcode_stage.services.messaging import MessageRouter
from zcode_stage.services.presence import Channel, PresenceDirectory

logger = logging.getLogger(__name__)


def decode_frame(raw: str | bytes) -> RegisterFrame | ChatFrame:
    """Parse and validate one client frame.

    Raises:
        ChannelProtocolError: If the frame is not JSON, not an object, or
            does not match a known frame type
    """
    try:
        payload: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ChannelProtocolError("Frame is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise ChannelProtocolError("Frame must be a JSON object")
    try:
        return inbound_frame_adapter.validate_python(payload)
    except ValidationError as exc:
        raise ChannelProtocolError(_describe_validation_error(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ChannelProtocolError.default_detail
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if first.get("type") == "union_tag_invalid" or location == "":
        return "Unknown frame type"
    return f"Invalid frame field '{location}': {first.get('msg')}"


class ChannelSession:
    """Protocol state for one connected client."""

    def __init__(
        self,
        channel: Channel,
        identity_service: IdentityService,
        presence: PresenceDirectory,
        router: MessageRouter,
    ) -> None:
        self.channel = channel
        self.identity_id: str | None = None
        self._identity_service = identity_service
        self._presence = presence
        self._router = router

    async def handle_text(self, raw: str | bytes) -> None:
        """Decode and dispatch one inbound frame, reporting failures on the channel."""
        try:
            frame = decode_frame(raw)
            if isinstance(frame, RegisterFrame):
                await self._on_register(frame)
            else:
                await self._on_chat(frame)
        except ChannelProtocolError as exc:
            logger.warning("Channel protocol error: %s", exc.detail)
            await self.send_error(exc.detail)
        except ZCodeError as exc:
            await self.send_error(exc.detail)

    async def send_error(self, reason: str) -> None:
        await self.channel.send_json(ErrorFrame(reason=reason).to_wire())

    async def close(self) -> None:
        """Release this channel's presence registration, if it still holds one."""
        if self.identity_id is None:
            return
        identity_id, self.identity_id = self.identity_id, None
        await self._presence.unregister(identity_id, self.channel)

    async def _on_register(self, frame: RegisterFrame) -> None:
        identity = self._identity_service.resolve_identity(frame.token)
        if self.identity_id is not None and self.identity_id != identity.id:
            await self._presence.unregister(self.identity_id, self.channel)
        self.identity_id = identity.id

        welcome = WelcomeFrame(
            identity_summary=IdentitySummary.from_identity(identity, online=True)
        )
        await self.channel.send_json(welcome.to_wire())
        await self._presence.register(identity.id, self.channel)

    async def _on_chat(self, frame: ChatFrame) -> None:
        sender = self._identity_service.resolve_identity(frame.token)
        message = await self._router.route(sender.id, frame.to_id, frame.text)
        ack = ChatAckFrame(message=ChatMessageResponse.model_validate(message))
        await self.channel.send_json(ack.to_wire())
