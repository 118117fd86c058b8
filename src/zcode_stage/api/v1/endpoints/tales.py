# src/zcode_stage/api/v1/endpoints/tales.py
"""Tale submission, feed and repost endpoints for the Z-Code API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from zcode_stage.api.v1.dependencies import StateDep, bearer_scheme
from zcode_stage.models import Tale
from zcode_stage.schemas.tale import RepostRequest, TaleCreate, TaleEnvelope, TaleResponse

router = APIRouter(tags=["tales"])


def _envelope(tale: Tale) -> TaleEnvelope:
    return TaleEnvelope(tale=TaleResponse.model_validate(tale))


def _serialize(tales: list[Tale]) -> list[TaleResponse]:
    return [TaleResponse.model_validate(tale) for tale in tales]


@router.get("/feed", response_model=list[TaleResponse])
async def get_feed(state: StateDep) -> list[TaleResponse]:
    """List approved tales, newest first."""
    return _serialize(state.tale_service.list_approved_feed())


@router.get("/profile/{token}/tales", response_model=list[TaleResponse])
async def get_own_tales(token: str, state: StateDep) -> list[TaleResponse]:
    """List every tale the token's identity submitted, pending ones included."""
    identity = state.identity_service.resolve_identity(token)
    return _serialize(state.tale_service.list_own_tales(identity.id))


@router.post("/tales", response_model=TaleEnvelope, status_code=status.HTTP_201_CREATED)
async def submit_tale(payload: TaleCreate, state: StateDep) -> TaleEnvelope:
    """Submit a tale. It stays out of the feed until an operator approves it.

    Raises:
        Unauthorized: If the token is invalid
        InvalidInput: If the media payload is too large or the caption too long
    """
    identity = state.identity_service.resolve_identity(payload.token)
    tale = state.tale_service.submit_tale(
        identity.id,
        payload.media_payload,
        payload.media_kind,
        payload.caption,
    )
    return _envelope(tale)


@router.get("/tales/{tale_id}", response_model=TaleEnvelope)
async def get_tale(
    tale_id: str,
    state: StateDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TaleEnvelope:
    """Get one tale. Pending tales are only visible to their owner's bearer token."""
    viewer_id: str | None = None
    if credentials is not None:
        viewer_id = state.identity_service.resolve_identity(credentials.credentials).id
    return _envelope(state.tale_service.get_visible_tale(tale_id, viewer_id))


@router.post("/tales/{tale_id}/repost", response_model=TaleEnvelope)
async def repost_tale(tale_id: str, payload: RepostRequest, state: StateDep) -> TaleEnvelope:
    """Repost an approved tale.

    Raises:
        NotFound: If the tale does not exist or is still pending
    """
    identity = state.identity_service.resolve_identity(payload.token)
    return _envelope(state.tale_service.repost(identity.id, tale_id))
