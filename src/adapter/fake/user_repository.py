"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timedelta, timezone
from domain.model.errors import DuplicateError
from domain.model.user import PasswordHistoryEntry, User


class FakeUserRepository:
    def __init__(self, history_limit: int = 0):
        self.store: dict[str, User] = {}
        self.history_limit = history_limit

    # ── write operations ─────────────────────────────────────

    def upsert_google_user(self, google_id: str, email: str, name: str) -> User:
        now = datetime.now(timezone.utc)
        user = self.get_by_google_id(google_id)
        if user:
            user.last_login = now
            user.updated_at = now
            return user

        if any(u.email == email for u in self.store.values()):
            raise DuplicateError("Email already registered")

        user = User(
            id=uuid.uuid4().hex,
            google_id=google_id,
            name=name,
            email=email,
            created_at=now,
            updated_at=now,
            last_login=now,
        )
        self.store[user.id] = user
        return user

    def append_password_history(
        self, user_id: str, password: str, created_at: datetime,
    ) -> PasswordHistoryEntry | None:
        user = self.store.get(user_id)
        if not user:
            return None

        timestamp = created_at
        if user.password_history and user.password_history[-1].created_at >= timestamp:
            timestamp = user.password_history[-1].created_at + timedelta(milliseconds=1)

        entry = PasswordHistoryEntry(password=password, created_at=timestamp)
        user.password_history.append(entry)
        if self.history_limit > 0:
            del user.password_history[:-self.history_limit]
        user.updated_at = timestamp
        return entry

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def get_by_google_id(self, google_id: str) -> User | None:
        for user in self.store.values():
            if user.google_id == google_id:
                return user
        return None
