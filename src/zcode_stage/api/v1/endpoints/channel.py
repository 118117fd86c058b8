# src/zcode_stage/api/v1/endpoints/channel.py
"""Persistent WebSocket channel for presence, chat and live feed updates."""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from zcode_stage.services.channel import ChannelSession
from zcode_stage.state import AppState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["channel"])


@router.websocket("/ws")
async def channel_endpoint(websocket: WebSocket) -> None:
    """Serve one client channel until it disconnects.

    Frames are handled one at a time in arrival order. Malformed frames are
    answered with an ``error`` frame; only a disconnect ends the loop.
    """
    state: AppState = websocket.app.state.zcode
    await websocket.accept()
    session = ChannelSession(websocket, state.identity_service, state.presence, state.router)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            await session.handle_text(raw)
    except WebSocketDisconnect:
        pass
    finally:
        logger.debug("Channel closed for identity %s", session.identity_id)
        await session.close()
