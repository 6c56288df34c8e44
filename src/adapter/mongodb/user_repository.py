"""MongoDB implementation of UserRepository."""

import os
import uuid
from datetime import datetime, timedelta, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, StoreError
from domain.model.user import PasswordHistoryEntry, User

logger = getLogger(__name__)

# Newest entries kept per user; 0 keeps everything
PASSWORD_HISTORY_LIMIT = int(os.getenv('PASSWORD_HISTORY_LIMIT', '100'))

# Appends racing for the same millisecond bump forward at most this many times
_MAX_APPEND_ATTEMPTS = 5
_ONE_MS = timedelta(milliseconds=1)


def _truncate_to_ms(value: datetime) -> datetime:
    """MongoDB stores datetimes with millisecond precision."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class MongoUserRepository:
    def __init__(self, db: Database, history_limit: int = PASSWORD_HISTORY_LIMIT):
        self.collection = db[USERS_COLLECTION_NAME]
        self.history_limit = history_limit

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('google_id', 1)], 'idx_users_google_id', unique=True)
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            google_id=doc['google_id'],
            name=doc['name'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            last_login=doc.get('last_login'),
            password_history=[
                PasswordHistoryEntry(password=entry['password'], created_at=entry['created_at'])
                for entry in doc.get('password_history', [])
            ],
        )

    def upsert_google_user(self, google_id: str, email: str, name: str) -> User:
        """Find the user by Google id or create it, refreshing last_login."""
        now = datetime.now(timezone.utc)
        update = {
            '$setOnInsert': {
                '_id': uuid.uuid4().hex,
                'google_id': google_id,
                'email': email,
                'name': name,
                'created_at': now,
                'password_history': [],
            },
            '$set': {'last_login': now, 'updated_at': now},
        }
        # Two concurrent first logins can both try to insert; the loser
        # retries once and finds the winner's document.
        for attempt in range(2):
            try:
                doc = self.collection.find_one_and_update(
                    {'google_id': google_id},
                    update,
                    upsert=True,
                    return_document=ReturnDocument.AFTER,
                )
                return self._to_domain(doc)
            except DuplicateKeyError as e:
                if attempt == 0 and self.collection.find_one({'google_id': google_id}):
                    continue
                logger.warning(
                    "User upsert failed: email already exists",
                    extra={"email": email, "googleId": google_id},
                )
                raise DuplicateError("Email already registered") from e
            except PyMongoError as e:
                logger.error("Failed to upsert user", extra={"email": email, "error": str(e)})
                raise StoreError("Failed to save user") from e
        raise StoreError("Failed to save user")

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to load user") from e
        return self._to_domain(doc) if doc else None

    def get_by_google_id(self, google_id: str) -> User | None:
        """Find a user by Google subject id. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'google_id': google_id})
        except PyMongoError as e:
            logger.error("Failed to get user by Google ID", extra={"googleId": google_id, "error": str(e)})
            raise StoreError("Failed to load user") from e
        return self._to_domain(doc) if doc else None

    def append_password_history(
        self, user_id: str, password: str, created_at: datetime,
    ) -> PasswordHistoryEntry | None:
        """Append a history entry with a strictly increasing timestamp.

        The conditional filter on last_password_at makes the ordering check
        and the push a single atomic document update.
        """
        timestamp = _truncate_to_ms(created_at)
        push: dict = {'$each': [{'password': password, 'created_at': timestamp}]}
        if self.history_limit > 0:
            push['$slice'] = -self.history_limit

        try:
            for _ in range(_MAX_APPEND_ATTEMPTS):
                push['$each'][0]['created_at'] = timestamp
                result = self.collection.update_one(
                    {
                        '_id': user_id,
                        '$or': [
                            {'last_password_at': {'$exists': False}},
                            {'last_password_at': {'$lt': timestamp}},
                        ],
                    },
                    {
                        '$push': {'password_history': push},
                        '$set': {'last_password_at': timestamp, 'updated_at': timestamp},
                    },
                )
                if result.matched_count:
                    logger.debug("Appended password history", extra={"userId": user_id})
                    return PasswordHistoryEntry(password=password, created_at=timestamp)

                doc = self.collection.find_one({'_id': user_id}, {'last_password_at': 1})
                if doc is None:
                    return None
                if doc.get('last_password_at') is not None:
                    timestamp = max(timestamp, doc['last_password_at'] + _ONE_MS)
        except PyMongoError as e:
            logger.error("Failed to append password history", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to record password history") from e

        logger.error("Password history append kept losing races", extra={"userId": user_id})
        raise StoreError("Failed to record password history")
