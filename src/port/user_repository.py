from datetime import datetime
from typing import Protocol

from domain.model.user import PasswordHistoryEntry, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def upsert_google_user(self, google_id: str, email: str, name: str) -> User:
        """Find the user by Google subject id or create it, refreshing last_login.

        Raises DuplicateError if the email belongs to another Google account,
        StoreError on store failure.
        """
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_google_id(self, google_id: str) -> User | None:
        """Find a user by Google subject id. Return User or None if not found."""
        ...

    def append_password_history(
        self, user_id: str, password: str, created_at: datetime,
    ) -> PasswordHistoryEntry | None:
        """Append a history entry with a timestamp later than any existing one.

        Returns the stored entry (its timestamp may be bumped forward),
        or None if the user does not exist. Raises StoreError on store failure.
        """
        ...
