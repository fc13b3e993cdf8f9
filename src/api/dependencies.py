from fastapi import HTTPException

from adapter.external.google_oauth import GoogleOAuthAdapter
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.author_repository import MongoAuthorRepository
from adapter.mongodb.book_repository import MongoBookRepository
from adapter.mongodb.session_store import MongoSessionStore
from adapter.mongodb.user_repository import MongoUserRepository
from port.author_repository import AuthorRepository
from port.book_repository import BookRepository
from port.oauth_provider import OAuthProviderPort
from port.session_store import SessionStore
from port.user_repository import UserRepository


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_session_store() -> SessionStore:
    return MongoSessionStore(_get_db())


def get_book_repo() -> BookRepository:
    return MongoBookRepository(_get_db())


def get_author_repo() -> AuthorRepository:
    return MongoAuthorRepository(_get_db())


def get_oauth_provider() -> OAuthProviderPort:
    return GoogleOAuthAdapter()
