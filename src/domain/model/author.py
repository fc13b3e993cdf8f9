# domain/model/author.py

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from urllib.parse import urlparse

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def is_valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


@dataclass
class Author:
    """Domain model representing a catalog author."""
    first_name: str
    email: str
    birth_date: date | None
    nationality: str
    id: str | None = None
    last_name: str | None = None
    biography: str | None = None
    website: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()

    def validate(self) -> list[str]:
        """Return every violated rule (empty when valid)."""
        errors = []

        if not self.first_name or not self.first_name.strip():
            errors.append('First name is required')
        if not self.email or not self.email.strip():
            errors.append('Email is required')
        if self.birth_date is None:
            errors.append('Birth date is required')
        if not self.nationality or not self.nationality.strip():
            errors.append('Nationality is required')
        if self.email and self.email.strip() and not is_valid_email(self.email):
            errors.append('Invalid email format')
        if self.website and self.website.strip() and not is_valid_url(self.website):
            errors.append('Invalid website URL format')
        if self.first_name and len(self.first_name) > 50:
            errors.append('First name must be less than 50 characters')
        if self.last_name and len(self.last_name) > 50:
            errors.append('Last name must be less than 50 characters')
        if self.biography and len(self.biography) > 1000:
            errors.append('Biography must be less than 1000 characters')

        return errors
