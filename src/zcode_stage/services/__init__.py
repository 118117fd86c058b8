# src/zcode_stage/services/__init__.py
"""Business logic services for the Z-Code application."""

from .channel import ChannelSession
from .identity_service import IdentityService
from .messaging import MessageRouter
from .moderation import ModerationService
from .presence import PresenceDirectory
from .tale_service import TaleService

__all__ = [
    "ChannelSession",
    "IdentityService",
    "MessageRouter",
    "ModerationService",
    "PresenceDirectory",
    "TaleService",
]
