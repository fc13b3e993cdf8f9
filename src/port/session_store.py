"""Port definition for the session backing store."""

from typing import Protocol


class SessionStore(Protocol):
    def create(self, user_ref: str, ttl_seconds: int) -> str | None:
        """Persist a session reference and return its opaque token (None on failure)."""
        ...

    def get(self, token: str) -> str | None:
        """Return the session reference, or None when unknown or expired."""
        ...

    def delete(self, token: str) -> bool: ...
