"""Session authentication and access guard dependencies.

The resolved principal is an explicit dependency value: routes (and the
guards) receive it from ``get_current_principal`` rather than reading it off
the request.
"""

import os
import logging
from typing import Optional
from fastapi import Depends, Request, Response

from api.dependencies import get_session_store, get_user_repo
from api.models import UserResponse
from domain.model.errors import AccountInactiveError, AuthenticationRequiredError
from domain.model.user import SafeUser
from port.session_store import SessionStore
from port.user_repository import UserRepository
from services.session_service import resolve_session

logger = logging.getLogger(__name__)

# Session configuration
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "library.sid")
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", str(24 * 60 * 60)))
SESSION_COOKIE_SECURE = os.getenv("APP_ENV", "development") == "production"
LOGIN_URL = "/auth/google"


def to_response(user: SafeUser) -> UserResponse:
    """Convert domain SafeUser to API UserResponse."""
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        display_name=user.display_name,
        profile_picture=user.profile_picture,
        provider=user.provider.value,
        is_active=user.is_active,
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_TTL_SECONDS,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(SESSION_COOKIE_NAME)


def get_current_principal(
    request: Request,
    store: SessionStore = Depends(get_session_store),
    user_repo: UserRepository = Depends(get_user_repo),
) -> Optional[UserResponse]:
    """Resolve the session cookie to a user (optional). Returns None if not logged in."""
    user = resolve_session(get_session_token(request), store, user_repo)
    if not user:
        return None
    return to_response(user)


def require_authenticated(
    principal: Optional[UserResponse] = Depends(get_current_principal),
) -> UserResponse:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if principal is None:
        raise AuthenticationRequiredError(
            "You must be logged in to access this resource. "
            "Please authenticate with Google OAuth."
        )
    return principal


def require_active(
    principal: UserResponse = Depends(require_authenticated),
) -> UserResponse:
    """Like require_authenticated, plus 403 when the account is deactivated."""
    if not principal.is_active:
        logger.info("Inactive account rejected", extra={"userId": principal.id})
        raise AccountInactiveError(
            "Your account has been deactivated. Please contact support."
        )
    return principal
