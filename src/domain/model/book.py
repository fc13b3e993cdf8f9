# domain/model/book.py

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def is_valid_isbn(isbn: str) -> bool:
    """ISBN-10 or ISBN-13 digits, ignoring dashes and spaces."""
    clean = re.sub(r"[-\s]", "", isbn)
    return bool(re.fullmatch(r"\d{10}|\d{13}", clean))


@dataclass
class Book:
    """Domain model representing a catalog book."""
    title: str
    author: str
    isbn: str
    published_date: date | None
    genre: str
    pages: int | None
    publisher: str
    id: str | None = None
    language: str | None = None
    description: str | None = None
    available_copies: int = 1
    total_copies: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def validate(self) -> list[str]:
        """Return every violated rule (empty when valid)."""
        errors = []

        if _blank(self.title):
            errors.append('Title is required')
        if _blank(self.author):
            errors.append('Author is required')
        if _blank(self.isbn):
            errors.append('ISBN is required')
        if self.published_date is None:
            errors.append('Published date is required')
        if _blank(self.genre):
            errors.append('Genre is required')
        if self.pages is None or self.pages <= 0:
            errors.append('Pages must be a positive number')
        if _blank(self.publisher):
            errors.append('Publisher is required')
        if self.language is not None and _blank(self.language):
            errors.append('Language cannot be empty if provided')
        if self.available_copies < 0:
            errors.append('Available copies must be a non-negative number')
        if self.total_copies <= 0:
            errors.append('Total copies must be a positive number')
        if not _blank(self.isbn) and not is_valid_isbn(self.isbn):
            errors.append('Invalid ISBN format')

        return errors
