# src/zcode_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    channel_router,
    messages_router,
    moderation_router,
    tales_router,
    users_router,
)

__all__ = [
    "auth_router",
    "channel_router",
    "messages_router",
    "moderation_router",
    "tales_router",
    "users_router",
]
