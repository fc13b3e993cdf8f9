"""Port definition for AuthorRepository."""

from typing import Protocol

from domain.model.author import Author


class AuthorRepository(Protocol):
    def create(self, author: Author) -> Author | None: ...

    def get_by_id(self, author_id: str) -> Author | None: ...

    def get_by_email(self, email: str) -> Author | None: ...

    def find_all(self) -> list[Author]: ...

    def update(self, author_id: str, author: Author) -> Author | None: ...

    def delete(self, author_id: str) -> bool: ...
