"""Profile, directory and follow endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from zcode_stage.api.v1.dependencies import CurrentIdentityDep, StateDep
from zcode_stage.schemas.user import IdentityResponse, IdentitySummary, ProfileUpdateRequest

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=IdentityResponse)
async def get_my_profile(current_identity: CurrentIdentityDep) -> IdentityResponse:
    """Return the caller's full profile."""
    return IdentityResponse.model_validate(current_identity)


@router.patch("/me", response_model=IdentityResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    current_identity: CurrentIdentityDep,
    state: StateDep,
) -> IdentityResponse:
    """Update bio, avatar or display name. Omitted fields are left unchanged."""
    identity = state.identity_service.update_profile(
        current_identity.id,
        bio=payload.bio,
        avatar=payload.avatar,
        display_name=payload.display_name,
    )
    return IdentityResponse.model_validate(identity)


@router.get("", response_model=list[IdentitySummary])
async def list_users(state: StateDep) -> list[IdentitySummary]:
    """Public user directory with online flags. The operator is never listed."""
    online = state.presence.online_ids()
    return [
        IdentitySummary.from_identity(identity, online=identity.id in online)
        for identity in state.identity_service.directory()
    ]


@router.get("/{identity_id}", response_model=IdentitySummary)
async def get_user(identity_id: str, state: StateDep) -> IdentitySummary:
    """Return the public summary of one identity."""
    identity = state.identities.require(identity_id)
    return IdentitySummary.from_identity(identity, online=state.presence.is_online(identity.id))


@router.post("/{identity_id}/follow", response_model=IdentityResponse)
async def follow_user(
    identity_id: str,
    current_identity: CurrentIdentityDep,
    state: StateDep,
) -> IdentityResponse:
    """Follow another identity. Following twice is a no-op."""
    follower = state.identity_service.follow(current_identity.id, identity_id)
    return IdentityResponse.model_validate(follower)


@router.delete("/{identity_id}/follow", response_model=IdentityResponse, status_code=status.HTTP_200_OK)
async def unfollow_user(
    identity_id: str,
    current_identity: CurrentIdentityDep,
    state: StateDep,
) -> IdentityResponse:
    """Stop following another identity."""
    follower = state.identity_service.unfollow(current_identity.id, identity_id)
    return IdentityResponse.model_validate(follower)
