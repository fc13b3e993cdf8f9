"""Port definition for BookRepository."""

from typing import Protocol

from domain.model.book import Book


class BookRepository(Protocol):
    def create(self, book: Book) -> Book | None: ...

    def get_by_id(self, book_id: str) -> Book | None: ...

    def get_by_isbn(self, isbn: str) -> Book | None: ...

    def find_all(self) -> list[Book]: ...

    def update(self, book_id: str, book: Book) -> Book | None: ...

    def delete(self, book_id: str) -> bool: ...

    def exists_for_author(self, names: list[str]) -> bool:
        """True when any book's free-text author field equals one of ``names``."""
        ...
