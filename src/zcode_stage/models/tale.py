# src/zcode_stage/models/tale.py
"""Tale records and their moderation state."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

from zcode_stage.core.time import utcnow


class TaleState(str, enum.Enum):
    """Moderation state of a tale. ``APPROVED`` is terminal."""

    PENDING = "pending"
    APPROVED = "approved"


class MediaKind(str, enum.Enum):
    """Kinds of media a tale can carry."""

    IMAGE = "image"
    VIDEO = "video"


@dataclass
class Tale:
    """A media post awaiting or having received moderation approval."""

    id: str
    owner_id: str
    media_payload: str
    media_kind: MediaKind
    caption: str
    # Monotonic sequence number; feeds sort on this, never on wall time.
    order_index: int
    state: TaleState = TaleState.PENDING
    repost_count: int = 0
    created_at: datetime = field(default_factory=utcnow)
    approved_at: datetime | None = None

    @property
    def approved(self) -> bool:
        """Return True once the moderation gate has approved the tale."""
        return self.state is TaleState.APPROVED
