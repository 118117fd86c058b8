# src/zcode_stage/models/identity.py
"""Identity and session records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from zcode_stage.core.time import utcnow


@dataclass
class Identity:
    """A registered account and its public profile."""

    id: str
    display_name: str
    avatar: str
    bio: str = ""
    # SHA-256 digest of the credential; None for passwordless accounts.
    credential_secret: str | None = None
    points: int = 0
    owned_tale_ids: list[str] = field(default_factory=list)
    following_ids: set[str] = field(default_factory=set)
    follower_ids: set[str] = field(default_factory=set)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Session:
    """An opaque login token bound to one identity."""

    token: str
    identity_id: str
    created_at: datetime = field(default_factory=utcnow)
    is_admin: bool = False
