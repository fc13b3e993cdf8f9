"""In-memory implementation of SessionStore for testing."""

import secrets
from datetime import datetime, timedelta, timezone


class FakeSessionStore:
    def __init__(self):
        self.sessions: dict[str, tuple[str, datetime]] = {}

    def create(self, user_ref: str, ttl_seconds: int) -> str | None:
        token = secrets.token_urlsafe(32)
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        self.sessions[token] = (user_ref, expires_at)
        return token

    def get(self, token: str) -> str | None:
        entry = self.sessions.get(token)
        if not entry:
            return None
        user_ref, expires_at = entry
        if expires_at <= datetime.now(timezone.utc):
            del self.sessions[token]
            return None
        return user_ref

    def delete(self, token: str) -> bool:
        return self.sessions.pop(token, None) is not None
