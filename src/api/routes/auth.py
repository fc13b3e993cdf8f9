"""Authentication routes (Google OAuth login, session status, logout)."""

import os
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from api.dependencies import get_oauth_provider, get_session_store, get_user_repo
from api.models import (
    AuthStatusResponse,
    DashboardResponse,
    LoginSuccessResponse,
    MessageResponse,
    UserResponse,
)
from api.security import (
    SESSION_TTL_SECONDS,
    clear_session_cookie,
    get_current_principal,
    get_session_token,
    require_active,
    require_authenticated,
    set_session_cookie,
)
from domain.model.errors import DomainError, SerializationError
from port.oauth_provider import OAuthProviderPort
from port.session_store import SessionStore
from port.user_repository import UserRepository
from services.auth_service import handle_callback, start_login
from services.session_service import end_session, establish_session


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

OAUTH_TIMEOUT_SECONDS = float(os.getenv("OAUTH_TIMEOUT_SECONDS", "10"))
LOGIN_SUCCESS_REDIRECT = os.getenv("LOGIN_SUCCESS_REDIRECT", "/auth/dashboard")
LOGIN_FAILURE_REDIRECT = os.getenv("LOGIN_FAILURE_REDIRECT", "/auth/login/failed")


@router.get("/google", status_code=status.HTTP_302_FOUND)
async def google_login(provider: OAuthProviderPort = Depends(get_oauth_provider)):
    """Redirect to the Google OAuth consent screen."""
    return RedirectResponse(start_login(provider), status_code=status.HTTP_302_FOUND)


@router.get("/google/callback", status_code=status.HTTP_302_FOUND)
async def google_callback(
    request: Request,
    code: str | None = None,
    error: str | None = None,
    provider: OAuthProviderPort = Depends(get_oauth_provider),
    repo: UserRepository = Depends(get_user_repo),
    store: SessionStore = Depends(get_session_store),
):
    """Handle the OAuth callback, establish a session and redirect.

    Failures redirect to the failure destination without any user details.
    """
    outcome = await handle_callback(
        provider, repo, code=code, error=error, timeout=OAUTH_TIMEOUT_SECONDS,
    )
    if not outcome.authenticated:
        return RedirectResponse(LOGIN_FAILURE_REDIRECT, status_code=status.HTTP_302_FOUND)

    # Never carry a pre-login session over into the authenticated one
    end_session(get_session_token(request), store)

    try:
        token = establish_session(outcome.user, store, ttl_seconds=SESSION_TTL_SECONDS)
    except SerializationError:
        raise
    except DomainError as e:
        logger.error("Session save failed", extra={"userId": outcome.user.id, "error": str(e)})
        return RedirectResponse(LOGIN_FAILURE_REDIRECT, status_code=status.HTTP_302_FOUND)

    response = RedirectResponse(LOGIN_SUCCESS_REDIRECT, status_code=status.HTTP_302_FOUND)
    set_session_cookie(response, token)
    return response


@router.get("/login/success", response_model=LoginSuccessResponse)
async def login_success(principal: UserResponse | None = Depends(get_current_principal)):
    """Return the current user after a successful login."""
    if principal is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": "User not authenticated"},
        )
    return LoginSuccessResponse(message="User authenticated successfully", user=principal)


@router.get("/login/failed", status_code=status.HTTP_401_UNAUTHORIZED, response_model=MessageResponse)
async def login_failed():
    """Authentication failure landing endpoint."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"success": False, "message": "Authentication failed"},
    )


@router.get("/status", response_model=AuthStatusResponse)
async def auth_status(principal: UserResponse | None = Depends(get_current_principal)):
    """Report whether the caller has a live session."""
    return AuthStatusResponse(authenticated=principal is not None, user=principal)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    current_user: UserResponse = Depends(require_authenticated),
    store: SessionStore = Depends(get_session_store),
):
    """Destroy the session and clear the session cookie."""
    end_session(get_session_token(request), store)

    response = JSONResponse(content={"success": True, "message": "Logout successful"})
    clear_session_cookie(response)

    logger.info("User logged out", extra={"userId": current_user.id})
    return response


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(current_user: UserResponse = Depends(require_active)):
    """Protected route example."""
    return DashboardResponse(
        message="Welcome to your dashboard",
        user=current_user,
        stats={"message": "You can now access protected routes to manage books and authors"},
    )
