# domain/model/user.py

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Provider(str, Enum):
    """Authentication provider a user signed up with."""
    GOOGLE = 'google'
    LOCAL = 'local'


# ── Value Objects ────────────────────────────────────────


@dataclass(frozen=True)
class ProviderEmail:
    """One entry of the provider profile's email list."""
    value: str
    verified: bool = False


@dataclass(frozen=True)
class ProviderProfile:
    """Profile returned by the OAuth provider after a code exchange."""
    id: str
    emails: list[ProviderEmail] = field(default_factory=list)
    given_name: str | None = None
    family_name: str | None = None
    display_name: str | None = None
    photos: list[str] = field(default_factory=list)

    @property
    def primary_email(self) -> str | None:
        """First verified email, falling back to the first listed one."""
        for email in self.emails:
            if email.verified and email.value:
                return email.value
        for email in self.emails:
            if email.value:
                return email.value
        return None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a user; lists every violated rule."""
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class SafeUser:
    """Redacted user view, the only representation sent to clients."""
    id: str
    email: str
    first_name: str
    last_name: str
    provider: Provider
    is_active: bool
    created_at: datetime
    updated_at: datetime
    display_name: str | None = None
    profile_picture: str | None = None
    last_login: datetime | None = None


# ── User Domain Model ────────────────────────────────────


@dataclass
class User:
    """Domain model representing a user.

    A user with ``id=None`` has not been stored yet (a draft). ``from_store``
    marks instances rebuilt from persisted documents, whose ``password_hash``
    is already hashed.
    """
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
    id: str | None = None
    display_name: str | None = None
    profile_picture: str | None = None
    provider: Provider = Provider.GOOGLE
    is_active: bool = True
    google_id: str | None = None
    password_hash: str | None = None
    last_login: datetime | None = None
    from_store: bool = field(default=False, compare=False, repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


# ── Store mapping ────────────────────────────────────────


def from_stored_document(doc: dict) -> User:
    """Rebuild a User from a persisted document, password hash included.

    The result is marked ``from_store`` so its hash is never hashed again.
    """
    return User(
        id=str(doc['_id']),
        email=doc['email'],
        first_name=doc.get('first_name', ''),
        last_name=doc.get('last_name', ''),
        display_name=doc.get('display_name'),
        profile_picture=doc.get('profile_picture'),
        provider=Provider(doc.get('provider', Provider.GOOGLE.value)),
        is_active=doc.get('is_active', True),
        google_id=doc.get('google_id'),
        password_hash=doc.get('password_hash'),
        last_login=doc.get('last_login'),
        created_at=doc['created_at'],
        updated_at=doc['updated_at'],
        from_store=True,
    )


def to_document(user: User) -> dict:
    """Map a User to its stored document (without ``_id``).

    Google users never carry a password field, and users without a
    google id carry no google_id key so the sparse index skips them.
    """
    doc = {
        'email': user.email,
        'first_name': user.first_name,
        'last_name': user.last_name,
        'display_name': user.display_name,
        'profile_picture': user.profile_picture,
        'provider': user.provider.value,
        'is_active': user.is_active,
        'last_login': user.last_login,
        'created_at': user.created_at,
        'updated_at': user.updated_at,
    }
    if user.google_id is not None:
        doc['google_id'] = user.google_id
    if user.provider == Provider.LOCAL and user.password_hash:
        doc['password_hash'] = user.password_hash
    return doc
