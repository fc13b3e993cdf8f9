"""Book catalog routes.

Endpoints:
- GET /api/books: List all books
- GET /api/books/{id}: Get a book
- POST /api/books: Create a book (authenticated)
- PUT /api/books/{id}: Replace a book (authenticated)
- DELETE /api/books/{id}: Delete a book (authenticated)
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_book_repo
from api.models import BookEnvelope, BookListResponse, BookRequest, BookResponse, UserResponse
from api.security import require_authenticated
from domain.model.book import Book
from port.book_repository import BookRepository
from services import catalog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/books", tags=["books"])


def _to_domain(request: BookRequest) -> Book:
    return Book(
        title=request.title,
        author=request.author,
        isbn=request.isbn,
        published_date=request.published_date,
        genre=request.genre,
        pages=request.pages,
        publisher=request.publisher,
        language=request.language,
        description=request.description,
        available_copies=request.available_copies,
        total_copies=request.total_copies,
    )


def _to_response(book: Book) -> BookResponse:
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        published_date=book.published_date,
        genre=book.genre,
        pages=book.pages,
        publisher=book.publisher,
        language=book.language,
        description=book.description,
        available_copies=book.available_copies,
        total_copies=book.total_copies,
        created_at=book.created_at,
        updated_at=book.updated_at,
    )


@router.get("", response_model=BookListResponse)
async def list_books(repo: BookRepository = Depends(get_book_repo)):
    """List all books."""
    books = catalog_service.list_books(repo)
    return BookListResponse(count=len(books), data=[_to_response(b) for b in books])


@router.get("/{book_id}", response_model=BookEnvelope)
async def get_book(book_id: str, repo: BookRepository = Depends(get_book_repo)):
    """Get a single book by ID."""
    return BookEnvelope(data=_to_response(catalog_service.get_book(repo, book_id)))


@router.post("", response_model=BookEnvelope, status_code=status.HTTP_201_CREATED)
async def create_book(
    request: BookRequest,
    current_user: UserResponse = Depends(require_authenticated),
    repo: BookRepository = Depends(get_book_repo),
):
    """Create a book."""
    book = catalog_service.create_book(repo, _to_domain(request))
    logger.info("Book created via API", extra={"bookId": book.id, "userId": current_user.id})
    return BookEnvelope(message="Book created successfully", data=_to_response(book))


@router.put("/{book_id}", response_model=BookEnvelope)
async def update_book(
    book_id: str,
    request: BookRequest,
    current_user: UserResponse = Depends(require_authenticated),
    repo: BookRepository = Depends(get_book_repo),
):
    """Replace a book's fields."""
    book = catalog_service.update_book(repo, book_id, _to_domain(request))
    logger.info("Book updated", extra={"bookId": book_id, "userId": current_user.id})
    return BookEnvelope(message="Book updated successfully", data=_to_response(book))


@router.delete("/{book_id}", response_model=BookEnvelope)
async def delete_book(
    book_id: str,
    current_user: UserResponse = Depends(require_authenticated),
    repo: BookRepository = Depends(get_book_repo),
):
    """Delete a book."""
    book = catalog_service.delete_book(repo, book_id)
    return BookEnvelope(message="Book deleted successfully", data=_to_response(book))
