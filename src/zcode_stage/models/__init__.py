# src/zcode_stage/models/__init__.py
"""In-memory domain records for Z-Code Stage."""

from .identity import Identity, Session
from .message import ChatMessage
from .tale import MediaKind, Tale, TaleState

__all__ = [
    "ChatMessage",
    "Identity",
    "MediaKind",
    "Session",
    "Tale",
    "TaleState",
]
