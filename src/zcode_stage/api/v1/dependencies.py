"""Shared API dependencies for state access and authentication."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from zcode_stage.core.errors import Unauthorized
from zcode_stage.models import Identity
from zcode_stage.state import AppState

# HTTP Bearer scheme for the profile endpoints; missing headers are reported
# as 401 by get_current_identity rather than by FastAPI.
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_state(request: Request) -> AppState:
    """Return the store container built for this application."""
    return request.app.state.zcode


# Type alias for the store container dependency
StateDep = Annotated[AppState, Depends(get_app_state)]


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    state: StateDep,
) -> Identity:
    """Get the identity behind the bearer session token.

    Args:
        credentials: HTTP Bearer token credentials, if supplied
        state: Application store container

    Returns:
        Identity for the authenticated session

    Raises:
        Unauthorized: If the token is missing, unknown or orphaned
        Forbidden: If the token is an operator token
    """
    if credentials is None:
        raise Unauthorized("Not authenticated")
    return state.identity_service.resolve_identity(credentials.credentials)


# Type alias for current identity dependency
CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]
