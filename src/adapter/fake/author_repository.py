"""In-memory implementation of AuthorRepository for testing."""

import uuid
from dataclasses import replace

from domain.model.author import Author
from domain.model.errors import StoreUniquenessViolation


class FakeAuthorRepository:
    def __init__(self):
        self.store: dict[str, Author] = {}

    def _email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        return any(a.email == email and a.id != exclude_id for a in self.store.values())

    # ── write operations ─────────────────────────────────────

    def create(self, author: Author) -> Author | None:
        if self._email_taken(author.email):
            raise StoreUniquenessViolation("Email already exists")
        author_id = uuid.uuid4().hex
        self.store[author_id] = replace(author, id=author_id)
        return replace(self.store[author_id])

    def update(self, author_id: str, author: Author) -> Author | None:
        existing = self.store.get(author_id)
        if not existing:
            return None
        if self._email_taken(author.email, exclude_id=author_id):
            raise StoreUniquenessViolation("Email already exists")
        self.store[author_id] = replace(author, id=author_id, created_at=existing.created_at)
        return replace(self.store[author_id])

    def delete(self, author_id: str) -> bool:
        return self.store.pop(author_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, author_id: str) -> Author | None:
        author = self.store.get(author_id)
        return replace(author) if author else None

    def get_by_email(self, email: str) -> Author | None:
        for author in self.store.values():
            if author.email == email:
                return replace(author)
        return None

    def find_all(self) -> list[Author]:
        return [replace(a) for a in self.store.values()]
