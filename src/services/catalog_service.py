"""Catalog service — book and author CRUD business logic.

Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.author import Author
from domain.model.book import Book
from domain.model.errors import (
    ConflictError,
    DomainError,
    DuplicateError,
    NotFoundError,
    StoreUniquenessViolation,
    ValidationError,
)
from port.author_repository import AuthorRepository
from port.book_repository import BookRepository

logger = logging.getLogger(__name__)


def _check_valid(errors: list[str]) -> None:
    if errors:
        raise ValidationError("Validation failed", errors)


# ── Books ────────────────────────────────────────────────


def list_books(repo: BookRepository) -> list[Book]:
    return repo.find_all()


def get_book(repo: BookRepository, book_id: str) -> Book:
    book = repo.get_by_id(book_id)
    if not book:
        raise NotFoundError("Book not found")
    return book


def create_book(repo: BookRepository, book: Book) -> Book:
    """Validate and store a new book.

    Raises:
        ValidationError: book fields are invalid
        DuplicateError: ISBN already used by another book
    """
    _check_valid(book.validate())

    if repo.get_by_isbn(book.isbn):
        raise DuplicateError("Book with this ISBN already exists")

    try:
        created = repo.create(book)
    except StoreUniquenessViolation as e:
        raise DuplicateError("Book with this ISBN already exists") from e
    if not created:
        raise DomainError("Failed to create book")
    return created


def update_book(repo: BookRepository, book_id: str, book: Book) -> Book:
    """Replace a book's fields.

    Raises:
        ValidationError, NotFoundError, DuplicateError
    """
    _check_valid(book.validate())
    get_book(repo, book_id)

    conflict = repo.get_by_isbn(book.isbn)
    if conflict and conflict.id != book_id:
        raise DuplicateError("ISBN already exists for another book")

    try:
        updated = repo.update(book_id, replace(book, updated_at=datetime.now(timezone.utc)))
    except StoreUniquenessViolation as e:
        raise DuplicateError("ISBN already exists for another book") from e
    if not updated:
        raise NotFoundError("Book not found")
    return updated


def delete_book(repo: BookRepository, book_id: str) -> Book:
    book = get_book(repo, book_id)
    if not repo.delete(book_id):
        raise DomainError("Failed to delete book")
    logger.info("Book deleted", extra={"bookId": book_id})
    return book


# ── Authors ──────────────────────────────────────────────


def list_authors(repo: AuthorRepository) -> list[Author]:
    return repo.find_all()


def get_author(repo: AuthorRepository, author_id: str) -> Author:
    author = repo.get_by_id(author_id)
    if not author:
        raise NotFoundError("Author not found")
    return author


def create_author(repo: AuthorRepository, author: Author) -> Author:
    """Validate and store a new author.

    Raises:
        ValidationError: author fields are invalid
        DuplicateError: email already used by another author
    """
    _check_valid(author.validate())

    if repo.get_by_email(author.email):
        raise DuplicateError("Author with this email already exists")

    try:
        created = repo.create(author)
    except StoreUniquenessViolation as e:
        raise DuplicateError("Author with this email already exists") from e
    if not created:
        raise DomainError("Failed to create author")
    return created


def update_author(repo: AuthorRepository, author_id: str, author: Author) -> Author:
    _check_valid(author.validate())
    get_author(repo, author_id)

    conflict = repo.get_by_email(author.email)
    if conflict and conflict.id != author_id:
        raise DuplicateError("Email already exists for another author")

    try:
        updated = repo.update(author_id, replace(author, updated_at=datetime.now(timezone.utc)))
    except StoreUniquenessViolation as e:
        raise DuplicateError("Email already exists for another author") from e
    if not updated:
        raise NotFoundError("Author not found")
    return updated


def delete_author(
    author_repo: AuthorRepository,
    book_repo: BookRepository,
    author_id: str,
) -> Author:
    """Delete an author that no book refers to.

    Books reference authors through a free-text field, matched here by full
    name or email.

    Raises:
        NotFoundError: unknown author
        ConflictError: books still reference the author
    """
    author = get_author(author_repo, author_id)

    if book_repo.exists_for_author([author.full_name, author.email]):
        raise ConflictError("Cannot delete author. Author has associated books.")

    if not author_repo.delete(author_id):
        raise DomainError("Failed to delete author")
    logger.info("Author deleted", extra={"authorId": author_id})
    return author
