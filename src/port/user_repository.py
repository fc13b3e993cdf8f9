from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, user: User) -> User | None:
        """Insert a new user; the store assigns the id. Return the stored User or None on failure.

        Raises StoreUniquenessViolation when the email is already taken.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def find_by_google_id_or_email(self, google_id: str, email: str) -> User | None:
        """Find a user matching either the provider id or the email."""
        ...

    def update(self, user_id: str, fields: dict) -> User | None:
        """Set fields (and refresh updated_at). Return the updated User or None if not found."""
        ...
