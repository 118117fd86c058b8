# src/zcode_stage/services/presence.py
"""Presence directory: which identity is reachable on which channel.

At most one channel is registered per identity. Registrations and removals
are plain dictionary updates that complete before any send is awaited, so a
presence change is never observed half-applied by another handler.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from fastapi import WebSocketDisconnect

from zcode_stage.repositories.identity_repo import IdentityRepository
from zcode_stage.schemas.channel import PresenceFrame
from zcode_stage.schemas.common import CamelModel
from zcode_stage.schemas.user import IdentitySummary

logger = logging.getLogger(__name__)

# Errors a send to an already-closed socket raises under Starlette/uvicorn.
CLOSED_CHANNEL_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    WebSocketDisconnect,
)

# Starlette reports a send after close as a RuntimeError with one of these.
_CLOSED_SEND_MESSAGES = (
    "close message has been sent",
    "websocket.close",
)


class Channel(Protocol):
    """Anything that can push a JSON frame to one client (e.g. a WebSocket)."""

    async def send_json(self, data: Any) -> None: ...


class PresenceDirectory:
    """Live mapping from identity id to its active delivery channel."""

    def __init__(self, identities: IdentityRepository) -> None:
        self._identities = identities
        self._channels: dict[str, Channel] = {}

    def lookup(self, identity_id: str) -> Channel | None:
        """Return the active channel for ``identity_id`` or None when offline."""
        return self._channels.get(identity_id)

    def is_online(self, identity_id: str) -> bool:
        return identity_id in self._channels

    def online_ids(self) -> set[str]:
        return set(self._channels)

    def snapshot(self) -> list[IdentitySummary]:
        """Return every identity with its online flag and current points."""
        return [
            IdentitySummary.from_identity(identity, online=identity.id in self._channels)
            for identity in self._identities.list_all()
        ]

    async def register(self, identity_id: str, channel: Channel) -> None:
        """Bind ``channel`` to ``identity_id``, replacing any earlier channel."""
        previous = self._channels.get(identity_id)
        self._channels[identity_id] = channel
        if previous is not None and previous is not channel:
            logger.info("Replaced channel for identity %s", identity_id)
        else:
            logger.info("Identity %s is online", identity_id)
        await self.broadcast_presence()

    async def unregister(self, identity_id: str, channel: Channel | None = None) -> bool:
        """Remove the registration for ``identity_id``.

        Args:
            identity_id: Identity whose channel closed.
            channel: The channel that closed. When given and a newer channel
                has since replaced it, the registration is left alone.

        Returns:
            True if a registration was removed.
        """
        current = self._channels.get(identity_id)
        if current is None:
            return False
        if channel is not None and current is not channel:
            return False
        del self._channels[identity_id]
        logger.info("Identity %s is offline", identity_id)
        await self.broadcast_presence()
        return True

    async def send(self, identity_id: str, frame: CamelModel | Mapping[str, Any]) -> bool:
        """Send a frame to one identity if it is online.

        Returns:
            True if the frame was handed to a live channel.
        """
        channel = self._channels.get(identity_id)
        if channel is None:
            return False
        delivered, dropped = await self._fan_out([(identity_id, channel)], _wire(frame))
        await self._announce_dropped(dropped)
        return delivered == 1

    async def broadcast(self, frame: CamelModel | Mapping[str, Any]) -> int:
        """Send a frame to every registered channel.

        Channels found closed are dropped from the directory and the new
        presence snapshot is fanned out to the rest. There is no retry.

        Returns:
            Number of channels the frame was delivered to.
        """
        delivered, dropped = await self._fan_out(list(self._channels.items()), _wire(frame))
        await self._announce_dropped(dropped)
        return delivered

    async def broadcast_presence(self) -> int:
        """Fan out the current presence snapshot."""
        return await self.broadcast(PresenceFrame(identities=self.snapshot()))

    async def _fan_out(
        self,
        targets: list[tuple[str, Channel]],
        payload: dict[str, Any],
    ) -> tuple[int, list[str]]:
        delivered = 0
        dropped: list[str] = []
        for identity_id, channel in targets:
            try:
                await channel.send_json(payload)
            except (RuntimeError, OSError, WebSocketDisconnect) as exc:
                if not is_closed_channel_error(exc):
                    logger.exception("Send to identity %s failed", identity_id)
                    continue
                logger.warning("Dropping closed channel for identity %s: %s", identity_id, exc)
                if self._channels.get(identity_id) is channel:
                    del self._channels[identity_id]
                    dropped.append(identity_id)
                continue
            delivered += 1
        return delivered, dropped

    async def _announce_dropped(self, dropped: list[str]) -> None:
        # Each pass that drops a channel shrinks the directory, so this ends.
        while dropped:
            logger.info("Identities %s are offline", ", ".join(dropped))
            payload = PresenceFrame(identities=self.snapshot()).to_wire()
            _, dropped = await self._fan_out(list(self._channels.items()), payload)


def is_closed_channel_error(exc: BaseException) -> bool:
    """Return True if ``exc`` means the peer socket is already gone."""
    if isinstance(exc, CLOSED_CHANNEL_ERRORS):
        return True
    message = str(exc)
    return isinstance(exc, RuntimeError) and any(m in message for m in _CLOSED_SEND_MESSAGES)


def _wire(frame: CamelModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(frame, CamelModel):
        return frame.to_wire()
    return dict(frame)
