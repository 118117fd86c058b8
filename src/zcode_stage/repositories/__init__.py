"""In-memory stores for identities, sessions and tales."""

from .identity_repo import IdentityRepository
from .session_repo import SessionRepository
from .tale_repo import TaleRepository

__all__ = ["IdentityRepository", "SessionRepository", "TaleRepository"]
