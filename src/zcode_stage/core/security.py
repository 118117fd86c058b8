"""Credential and token helpers."""
from __future__ import annotations

import hashlib
import secrets
import uuid


def hash_key(user_key: str) -> str:
    """Return a SHA-256 hash of the provided user key."""
    return hashlib.sha256(user_key.encode("utf-8")).hexdigest()


def verify_key(user_key: str | None, hashed_key: str | None) -> bool:
    """Check a presented credential against a stored digest.

    Args:
        user_key: Credential supplied by the client, if any.
        hashed_key: Digest stored at registration; ``None`` for passwordless accounts.

    Returns:
        True if the account is passwordless or the digests match; False otherwise.
    """
    if hashed_key is None:
        return True
    if user_key is None:
        return False
    return secrets.compare_digest(hash_key(user_key), hashed_key)


def verify_admin_secret(presented: str | None, expected: str) -> bool:
    """Return True if ``presented`` equals the configured operator secret."""
    if presented is None:
        return False
    return secrets.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def new_token() -> str:
    """Return a fresh 128-bit opaque session token."""
    return uuid.uuid4().hex


def new_id() -> str:
    """Return a fresh identifier for identities, tales and messages."""
    return uuid.uuid4().hex
