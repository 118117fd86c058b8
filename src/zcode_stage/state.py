"""Process-wide store and service container.

One :class:`AppState` is built per application by ``create_app`` and kept on
``app.state.zcode``. Handlers reach it through the API dependencies, so a
fresh app (as in tests) always starts from empty stores.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from zcode_stage.core.settings import Settings
from zcode_stage.repositories import IdentityRepository, SessionRepository, TaleRepository
from zcode_stage.services import (
    IdentityService,
    MessageRouter,
    ModerationService,
    PresenceDirectory,
    TaleService,
)


@dataclass
class AppState:
    """Stores and the services wired on top of them."""

    settings: Settings
    identities: IdentityRepository = field(default_factory=IdentityRepository)
    sessions: SessionRepository = field(default_factory=SessionRepository)
    tales: TaleRepository = field(default_factory=TaleRepository)

    def __post_init__(self) -> None:
        self.presence = PresenceDirectory(self.identities)
        self.identity_service = IdentityService(self.identities, self.sessions, self.settings)
        self.tale_service = TaleService(self.tales, self.identities, self.settings)
        self.moderation = ModerationService(
            self.tales, self.identities, self.presence, self.settings
        )
        self.router = MessageRouter(self.identities, self.presence, self.settings)
