# src/zcode_stage/api/v1/endpoints/messages.py
"""Direct message history endpoints for the Z-Code API.

Messages are sent over the WebSocket channel; these endpoints only read the
in-memory conversation logs.
"""

from __future__ import annotations

from fastapi import APIRouter

from zcode_stage.api.v1.dependencies import CurrentIdentityDep, StateDep
from zcode_stage.schemas.direct_message import ChatMessageResponse

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=dict[str, list[ChatMessageResponse]])
async def list_conversations(
    current_identity: CurrentIdentityDep,
    state: StateDep,
) -> dict[str, list[ChatMessageResponse]]:
    """Return all of the caller's conversations keyed by partner id."""
    conversations = state.router.conversations_for(current_identity.id)
    return {
        partner: [ChatMessageResponse.model_validate(m) for m in messages]
        for partner, messages in conversations.items()
    }


@router.get("/{partner_id}", response_model=list[ChatMessageResponse])
async def get_conversation(
    partner_id: str,
    current_identity: CurrentIdentityDep,
    state: StateDep,
) -> list[ChatMessageResponse]:
    """Return the conversation with ``partner_id`` in send order."""
    state.identities.require(partner_id)
    return [
        ChatMessageResponse.model_validate(m)
        for m in state.router.conversation(current_identity.id, partner_id)
    ]
