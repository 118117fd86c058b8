"""
Pydantic schemas for API request/response models and channel frames.

These schemas define the structure of API data for serialization and validation.
"""

from .channel import (
    ChatAckFrame,
    ChatDeliveryFrame,
    ChatFrame,
    ErrorFrame,
    PresenceFrame,
    RegisterFrame,
    TaleApprovedFrame,
    WelcomeFrame,
)
from .direct_message import ChatMessageResponse
from .tale import ApproveRequest, RepostRequest, TaleCreate, TaleEnvelope, TaleResponse
from .user import (
    AdminLoginRequest,
    AdminLoginResponse,
    IdentityResponse,
    IdentitySummary,
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    RegisterResponse,
)

__all__ = [
    "AdminLoginRequest", "AdminLoginResponse",
    "ApproveRequest",
    "ChatAckFrame", "ChatDeliveryFrame", "ChatFrame", "ErrorFrame",
    "PresenceFrame", "RegisterFrame", "TaleApprovedFrame", "WelcomeFrame",
    "ChatMessageResponse",
    "IdentityResponse", "IdentitySummary",
    "LoginRequest", "LoginResponse",
    "ProfileUpdateRequest",
    "RegisterRequest", "RegisterResponse",
    "RepostRequest",
    "TaleCreate", "TaleEnvelope", "TaleResponse",
]
