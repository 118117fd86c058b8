"""Operator (admin) endpoints for the Z-Code API."""

from __future__ import annotations

from fastapi import APIRouter, Query

from zcode_stage.api.v1.dependencies import StateDep
from zcode_stage.schemas.tale import ApproveRequest, TaleEnvelope, TaleResponse
from zcode_stage.schemas.user import AdminLoginRequest, AdminLoginResponse, IdentityResponse

router = APIRouter(prefix="/admin", tags=["moderation"])


@router.post("/login", response_model=AdminLoginResponse)
async def admin_login(payload: AdminLoginRequest, state: StateDep) -> AdminLoginResponse:
    """Exchange the operator secret for an admin token."""
    session = state.identity_service.login_admin(payload.credential)
    return AdminLoginResponse(admin_token=session.token)


@router.get("/pending", response_model=list[TaleResponse])
async def get_pending(
    state: StateDep,
    admin_token: str = Query(..., alias="adminToken"),
) -> list[TaleResponse]:
    """List tales awaiting approval, newest first."""
    session = state.identity_service.resolve_session(admin_token)
    return [TaleResponse.model_validate(t) for t in state.moderation.list_pending(session)]


@router.post("/approve", response_model=TaleEnvelope)
async def approve_tale(payload: ApproveRequest, state: StateDep) -> TaleEnvelope:
    """Approve a pending tale and announce it on every live channel.

    Approving an already approved tale returns it unchanged.

    Raises:
        Unauthorized: If the admin token is invalid
        Forbidden: If the token belongs to a regular identity
        NotFound: If the tale does not exist
    """
    session = state.identity_service.resolve_session(payload.admin_token)
    tale = await state.moderation.approve(session, payload.tale_id)
    return TaleEnvelope(tale=TaleResponse.model_validate(tale))


@router.get("/users", response_model=list[IdentityResponse])
async def get_users(
    state: StateDep,
    admin_token: str = Query(..., alias="adminToken"),
) -> list[IdentityResponse]:
    """List every registered identity with full profile data."""
    state.identity_service.resolve_admin(admin_token)
    return [IdentityResponse.model_validate(i) for i in state.identity_service.directory()]
