# src/zcode_stage/models/message.py
"""Direct chat messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from zcode_stage.core.time import utcnow


@dataclass(frozen=True)
class ChatMessage:
    """A directed chat message. Immutable once routed."""

    id: str
    from_id: str
    to_id: str
    text: str
    timestamp: datetime = field(default_factory=utcnow)

    @property
    def conversation_key(self) -> frozenset[str]:
        """Return the unordered participant pair this message belongs to."""
        return frozenset((self.from_id, self.to_id))
