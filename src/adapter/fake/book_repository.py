"""In-memory implementation of BookRepository for testing."""

import uuid
from dataclasses import replace

from domain.model.book import Book
from domain.model.errors import StoreUniquenessViolation


class FakeBookRepository:
    def __init__(self):
        self.store: dict[str, Book] = {}

    def _isbn_taken(self, isbn: str, exclude_id: str | None = None) -> bool:
        return any(b.isbn == isbn and b.id != exclude_id for b in self.store.values())

    # ── write operations ─────────────────────────────────────

    def create(self, book: Book) -> Book | None:
        if self._isbn_taken(book.isbn):
            raise StoreUniquenessViolation("ISBN already exists")
        book_id = uuid.uuid4().hex
        self.store[book_id] = replace(book, id=book_id)
        return replace(self.store[book_id])

    def update(self, book_id: str, book: Book) -> Book | None:
        existing = self.store.get(book_id)
        if not existing:
            return None
        if self._isbn_taken(book.isbn, exclude_id=book_id):
            raise StoreUniquenessViolation("ISBN already exists")
        self.store[book_id] = replace(book, id=book_id, created_at=existing.created_at)
        return replace(self.store[book_id])

    def delete(self, book_id: str) -> bool:
        return self.store.pop(book_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, book_id: str) -> Book | None:
        book = self.store.get(book_id)
        return replace(book) if book else None

    def get_by_isbn(self, isbn: str) -> Book | None:
        for book in self.store.values():
            if book.isbn == isbn:
                return replace(book)
        return None

    def find_all(self) -> list[Book]:
        return [replace(b) for b in self.store.values()]

    def exists_for_author(self, names: list[str]) -> bool:
        return any(b.author in names for b in self.store.values())
