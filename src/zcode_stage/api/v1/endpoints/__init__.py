# src/zcode_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .channel import router as channel_router
from .messages import router as messages_router
from .moderation import router as moderation_router
from .tales import router as tales_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "channel_router",
    "messages_router",
    "moderation_router",
    "tales_router",
    "users_router",
]
