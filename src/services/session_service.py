"""Session service — binds sessions to stored users and resolves them back.

The session only ever holds the user's id. Every request re-reads the user
from the repository and returns the redacted SafeUser.
"""

import logging

from domain.model.errors import DomainError, SerializationError
from domain.model.user import SafeUser, User
from port.session_store import SessionStore
from port.user_repository import UserRepository
from services.principal_service import to_safe_view

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 24 * 60 * 60


def serialize(user: User | SafeUser) -> str:
    """Return the session reference for a stored principal.

    Raises:
        SerializationError: the principal has never been stored
    """
    if user is None or not getattr(user, 'id', None):
        raise SerializationError("User object missing id")
    return str(user.id)


def deserialize(reference: str, repo: UserRepository) -> SafeUser | None:
    """Resolve a session reference to a SafeUser, or None if the user is gone."""
    user = repo.get_by_id(reference)
    if not user:
        logger.info("Session references unknown user", extra={"userId": reference})
        return None
    return to_safe_view(user)


def establish_session(
    user: User | SafeUser,
    store: SessionStore,
    ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
) -> str:
    """Persist a session for the user and return its token.

    Raises:
        SerializationError: the principal has never been stored
        DomainError: the session store rejected the write
    """
    reference = serialize(user)
    token = store.create(reference, ttl_seconds)
    if not token:
        raise DomainError("Failed to persist session")
    logger.info("Session established", extra={"userId": reference})
    return token


def resolve_session(
    token: str | None,
    store: SessionStore,
    repo: UserRepository,
) -> SafeUser | None:
    """Rehydrate the principal for a session token (None = not authenticated)."""
    if not token:
        return None
    reference = store.get(token)
    if not reference:
        return None
    return deserialize(reference, repo)


def end_session(token: str | None, store: SessionStore) -> bool:
    """Destroy a session. Unknown tokens are a no-op."""
    if not token:
        return False
    return store.delete(token)
