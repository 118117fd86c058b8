# src/zcode_stage/api/v1/endpoints/auth.py
"""Authentication endpoints for the Z-Code API."""

from __future__ import annotations

from fastapi import APIRouter, status

from zcode_stage.api.v1.dependencies import StateDep
from zcode_stage.schemas.user import (
    IdentityResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, state: StateDep) -> RegisterResponse:
    """Register a new identity.

    Args:
        payload: Display name, optional avatar and optional credential
        state: Application store container

    Returns:
        The newly created identity

    Raises:
        Conflict: If the display name is already registered
    """
    identity = state.identity_service.register(
        payload.display_name,
        avatar=payload.avatar,
        credential=payload.credential,
    )
    return RegisterResponse(identity=IdentityResponse.model_validate(identity))


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, state: StateDep) -> LoginResponse:
    """Exchange a display name and credential for a session token.

    Logging in as the operator name with the operator secret returns an
    admin token (``isAdmin: true``).
    """
    session = state.identity_service.authenticate(payload.display_name, payload.credential)
    return LoginResponse(token=session.token, is_admin=session.is_admin)
