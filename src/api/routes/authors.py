"""Author catalog routes.

Endpoints:
- GET /api/authors: List all authors
- GET /api/authors/{id}: Get an author
- POST /api/authors: Create an author (authenticated)
- PUT /api/authors/{id}: Replace an author (authenticated)
- DELETE /api/authors/{id}: Delete an author without books (authenticated)
"""

import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_author_repo, get_book_repo
from api.models import AuthorEnvelope, AuthorListResponse, AuthorRequest, AuthorResponse, UserResponse
from api.security import require_authenticated
from domain.model.author import Author
from port.author_repository import AuthorRepository
from port.book_repository import BookRepository
from services import catalog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/authors", tags=["authors"])


def _to_domain(request: AuthorRequest) -> Author:
    return Author(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        birth_date=request.birth_date,
        nationality=request.nationality,
        biography=request.biography,
        website=request.website,
    )


def _to_response(author: Author) -> AuthorResponse:
    return AuthorResponse(
        id=author.id,
        first_name=author.first_name,
        last_name=author.last_name,
        email=author.email,
        birth_date=author.birth_date,
        nationality=author.nationality,
        biography=author.biography,
        website=author.website,
        created_at=author.created_at,
        updated_at=author.updated_at,
    )


@router.get("", response_model=AuthorListResponse)
async def list_authors(repo: AuthorRepository = Depends(get_author_repo)):
    """List all authors."""
    authors = catalog_service.list_authors(repo)
    return AuthorListResponse(count=len(authors), data=[_to_response(a) for a in authors])


@router.get("/{author_id}", response_model=AuthorEnvelope)
async def get_author(author_id: str, repo: AuthorRepository = Depends(get_author_repo)):
    """Get a single author by ID."""
    return AuthorEnvelope(data=_to_response(catalog_service.get_author(repo, author_id)))


@router.post("", response_model=AuthorEnvelope, status_code=status.HTTP_201_CREATED)
async def create_author(
    request: AuthorRequest,
    current_user: UserResponse = Depends(require_authenticated),
    repo: AuthorRepository = Depends(get_author_repo),
):
    """Create an author."""
    author = catalog_service.create_author(repo, _to_domain(request))
    logger.info("Author created via API", extra={"authorId": author.id, "userId": current_user.id})
    return AuthorEnvelope(message="Author created successfully", data=_to_response(author))


@router.put("/{author_id}", response_model=AuthorEnvelope)
async def update_author(
    author_id: str,
    request: AuthorRequest,
    current_user: UserResponse = Depends(require_authenticated),
    repo: AuthorRepository = Depends(get_author_repo),
):
    """Replace an author's fields."""
    author = catalog_service.update_author(repo, author_id, _to_domain(request))
    return AuthorEnvelope(message="Author updated successfully", data=_to_response(author))


@router.delete("/{author_id}", response_model=AuthorEnvelope)
async def delete_author(
    author_id: str,
    current_user: UserResponse = Depends(require_authenticated),
    repo: AuthorRepository = Depends(get_author_repo),
    book_repo: BookRepository = Depends(get_book_repo),
):
    """Delete an author that has no books."""
    author = catalog_service.delete_author(repo, book_repo, author_id)
    return AuthorEnvelope(message="Author deleted successfully", data=_to_response(author))
