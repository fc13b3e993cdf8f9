"""Auth service — Google OAuth login flow and user reconciliation.

Pure business logic with no HTTP dependencies.

Flow: start → callback → exchange → reconcile → authenticated | failed

Provider and validation failures are expected outcomes, so ``handle_callback``
returns an AuthOutcome instead of raising. Anything else propagates.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from domain.model.errors import (
    DomainError,
    ProviderExchangeError,
    StoreUniquenessViolation,
    ValidationError,
)
from domain.model.user import Provider, ProviderProfile, SafeUser, User
from port.oauth_provider import OAuthProviderPort
from port.user_repository import UserRepository
from services.principal_service import from_provider_profile, to_safe_view, validate

logger = logging.getLogger(__name__)

DEFAULT_EXCHANGE_TIMEOUT_SECONDS = 10.0
MAX_RECONCILE_ATTEMPTS = 3


class AuthStatus(str, Enum):
    AUTHENTICATED = 'authenticated'
    FAILED = 'failed'


@dataclass(frozen=True)
class AuthOutcome:
    """Terminal state of one login interaction.

    ``reason`` is a short machine code and never carries user data.
    """
    status: AuthStatus
    user: SafeUser | None = None
    reason: str | None = None
    errors: tuple[str, ...] = ()

    @property
    def authenticated(self) -> bool:
        return self.status == AuthStatus.AUTHENTICATED

    @staticmethod
    def success(user: SafeUser) -> 'AuthOutcome':
        return AuthOutcome(status=AuthStatus.AUTHENTICATED, user=user)

    @staticmethod
    def failure(reason: str, errors: list[str] | None = None) -> 'AuthOutcome':
        return AuthOutcome(status=AuthStatus.FAILED, reason=reason, errors=tuple(errors or ()))


def start_login(provider: OAuthProviderPort) -> str:
    """Return the provider consent URL. No local state is created."""
    return provider.authorization_url()


async def handle_callback(
    provider: OAuthProviderPort,
    repo: UserRepository,
    code: str | None,
    error: str | None = None,
    timeout: float = DEFAULT_EXCHANGE_TIMEOUT_SECONDS,
) -> AuthOutcome:
    """Drive the callback leg of the handshake to a terminal outcome."""
    if error:
        logger.info("OAuth callback reported provider error", extra={"reason": "provider_denied"})
        return AuthOutcome.failure('provider_denied')
    if not code:
        logger.info("OAuth callback without code", extra={"reason": "missing_code"})
        return AuthOutcome.failure('missing_code')

    try:
        profile = await asyncio.wait_for(provider.exchange_code(code), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("OAuth code exchange timed out", extra={"timeout": timeout})
        return AuthOutcome.failure('exchange_timeout')
    except ProviderExchangeError as e:
        logger.warning("OAuth code exchange failed", extra={"error": str(e)})
        return AuthOutcome.failure('exchange_failed')

    try:
        user = reconcile(profile, repo)
    except ValidationError as e:
        logger.warning("OAuth profile rejected", extra={"errors": e.errors})
        return AuthOutcome.failure('validation_failed', e.errors)

    logger.info("OAuth login succeeded", extra={"userId": user.id})
    return AuthOutcome.success(to_safe_view(user))


def reconcile(profile: ProviderProfile, repo: UserRepository) -> User:
    """Find-or-create the user behind a provider profile.

    An existing match (same google id or same email) gets refreshed profile
    fields and a new ``last_login``. Otherwise a validated draft is inserted
    in a single write. A uniqueness violation on insert means a concurrent
    login created the record first, so the lookup is retried.

    Raises:
        ValidationError: the profile cannot produce a valid user
        DomainError: the store failed to persist the user
    """
    email = profile.primary_email
    if not email:
        raise ValidationError("Provider profile has no email address")

    for attempt in range(1, MAX_RECONCILE_ATTEMPTS + 1):
        existing = repo.find_by_google_id_or_email(profile.id, email)
        if existing:
            return _refresh(existing, profile, repo)

        draft = from_provider_profile(profile)
        result = validate(draft)
        if not result.is_valid:
            raise ValidationError("User validation failed", result.errors)

        try:
            created = repo.create(draft)
        except StoreUniquenessViolation:
            logger.info("Concurrent signup detected, retrying lookup", extra={"attempt": attempt})
            continue

        if not created:
            raise DomainError("Failed to create user")
        return created

    raise DomainError("Could not reconcile user after concurrent signups")


def _refresh(existing: User, profile: ProviderProfile, repo: UserRepository) -> User:
    now = datetime.now(timezone.utc)
    fields = {
        'google_id': profile.id,
        'first_name': profile.given_name or existing.first_name,
        'last_name': profile.family_name or existing.last_name,
        'display_name': profile.display_name or existing.display_name,
        'profile_picture': profile.photos[0] if profile.photos else existing.profile_picture,
        'provider': Provider.GOOGLE,
        'last_login': now,
        'updated_at': now,
    }
    if existing.password_hash:
        # google accounts never keep a password
        fields['password_hash'] = None
    updated = repo.update(existing.id, fields)
    if not updated:
        raise DomainError("Failed to update user")
    return updated
