from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class PasswordHistoryEntry:
    """A password submitted for analysis, as stored on the user."""
    password: str
    created_at: datetime


@dataclass
class User:
    """Domain model representing a user signed in through Google."""
    id: str
    google_id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: datetime | None = None
    password_history: list[PasswordHistoryEntry] = field(default_factory=list)

    def to_public_dict(self) -> dict:
        """Profile fields that are safe to return to the client."""
        return {
            'id': self.id,
            'google_id': self.google_id,
            'name': self.name,
            'email': self.email,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'last_login': self.last_login,
        }
