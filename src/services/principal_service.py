"""Principal normalizer — maps provider profiles and stored documents to Users.

Pure business logic with no HTTP dependencies. Also owns password hashing
and the redacted ``SafeUser`` view sent across the trust boundary.
"""

import logging
import re
from dataclasses import replace
from datetime import datetime, timezone

import bcrypt

from domain.model.errors import HashingError, ValidationError
from domain.model.user import (
    Provider,
    ProviderProfile,
    SafeUser,
    User,
    ValidationResult,
    from_stored_document,
)

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72
MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 50
MAX_DISPLAY_NAME_LENGTH = 100
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

__all__ = [
    "from_provider_profile",
    "from_stored_document",
    "validate",
    "to_safe_view",
    "hash_password",
    "verify_password",
    "with_password",
]


def from_provider_profile(profile: ProviderProfile) -> User:
    """Build an unsaved google User from a provider profile.

    Raises:
        ValidationError: the profile carries no email entry
    """
    email = profile.primary_email
    if not email:
        raise ValidationError("Provider profile has no email address")

    now = datetime.now(timezone.utc)
    return User(
        email=email,
        first_name=profile.given_name or '',
        last_name=profile.family_name or '',
        display_name=profile.display_name,
        profile_picture=profile.photos[0] if profile.photos else None,
        provider=Provider.GOOGLE,
        is_active=True,
        google_id=profile.id,
        last_login=now,
        created_at=now,
        updated_at=now,
    )


def validate(user: User, password: str | None = None) -> ValidationResult:
    """Check field presence and format, collecting every violated rule.

    ``password`` is the plaintext for a local user about to be stored. A
    store-sourced local user with a hash already satisfies the password rule.
    """
    errors = []

    if not user.email or not user.email.strip():
        errors.append('Email is required')
    elif not EMAIL_PATTERN.match(user.email):
        errors.append('Invalid email format')

    if not user.first_name or not user.first_name.strip():
        errors.append('First name is required')
    if not user.last_name or not user.last_name.strip():
        errors.append('Last name is required')

    if user.provider == Provider.LOCAL:
        has_stored_hash = user.from_store and bool(user.password_hash)
        if not has_stored_hash and (not password or len(password) < MIN_PASSWORD_LENGTH):
            errors.append(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long')
        elif password and len(password.encode('utf-8')) > BCRYPT_MAX_BYTES:
            errors.append(f'Password must be at most {BCRYPT_MAX_BYTES} bytes')
    elif user.provider == Provider.GOOGLE:
        if not user.google_id:
            errors.append('Google ID is required for Google authentication')

    if user.first_name and len(user.first_name) > MAX_NAME_LENGTH:
        errors.append(f'First name must be at most {MAX_NAME_LENGTH} characters')
    if user.last_name and len(user.last_name) > MAX_NAME_LENGTH:
        errors.append(f'Last name must be at most {MAX_NAME_LENGTH} characters')
    if user.display_name and len(user.display_name) > MAX_DISPLAY_NAME_LENGTH:
        errors.append(f'Display name must be at most {MAX_DISPLAY_NAME_LENGTH} characters')

    return ValidationResult(errors=errors)


def to_safe_view(user: User) -> SafeUser:
    """Redact a User for clients: no password hash, no provider id."""
    return SafeUser(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        display_name=user.display_name,
        profile_picture=user.profile_picture,
        provider=user.provider,
        is_active=user.is_active,
        last_login=user.last_login,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt.

    Raises:
        ValidationError: the password is longer than bcrypt can hash
        HashingError: the bcrypt primitive failed
    """
    encoded = password.encode('utf-8')
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValidationError(f'Password must be at most {BCRYPT_MAX_BYTES} bytes')
    try:
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(encoded, salt).decode('utf-8')
    except (ValueError, TypeError) as e:
        logger.error("Password hashing failed", extra={"error": str(e)})
        raise HashingError("Error hashing password") from e


def verify_password(plain: str, hashed: str) -> bool:
    """Compare a plaintext with a bcrypt hash. Mismatch returns False.

    Raises:
        HashingError: the stored hash is malformed or bcrypt failed
    """
    if not hashed:
        raise HashingError("No stored password hash")
    encoded = plain.encode('utf-8')
    # hash_password never accepts these, so no stored hash can match
    if len(encoded) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode('utf-8'))
    except (ValueError, TypeError, AttributeError) as e:
        logger.error("Password verification failed", extra={"error": str(e)})
        raise HashingError("Error comparing password") from e


def with_password(user: User, password: str | None) -> User:
    """Return a copy of a local user ready for storage, with its hash set.

    Store-sourced users keep their hash untouched, and google users never
    get one.
    """
    if user.provider != Provider.LOCAL:
        return replace(user, password_hash=None)
    if user.from_store or not password:
        return user
    return replace(user, password_hash=hash_password(password))
