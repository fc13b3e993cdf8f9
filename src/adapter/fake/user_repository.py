"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import StoreUniquenessViolation
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> User | None:
        if any(u.email == user.email for u in self.store.values()):
            raise StoreUniquenessViolation("Email already registered")

        user_id = uuid.uuid4().hex
        stored = replace(user, id=user_id, from_store=True)
        self.store[user_id] = stored
        return replace(stored)

    def update(self, user_id: str, fields: dict) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        fields = {**fields, 'updated_at': fields.get('updated_at', datetime.now(timezone.utc))}
        self.store[user_id] = replace(user, **fields)
        return replace(self.store[user_id])

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    def find_by_google_id_or_email(self, google_id: str, email: str) -> User | None:
        for user in self.store.values():
            if user.google_id == google_id or user.email == email:
                return replace(user)
        return None
