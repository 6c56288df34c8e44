import os
import time
import threading
import logging
from typing import Callable
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL') or os.getenv('MONGODB_URI')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'password_analyzer')
RECONNECT_DELAY_SECONDS = float(os.getenv('MONGO_RECONNECT_DELAY_SECONDS', '5'))
USERS_COLLECTION_NAME = 'users'


def _default_client_factory(url: str) -> MongoClient:
    return MongoClient(
        url,
        tz_aware=True,  # datetimes come back as UTC-aware
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=30000,
        maxPoolSize=10,
        minPoolSize=0,
        maxIdleTimeMS=30000,
        waitQueueTimeoutMS=10000,
        retryWrites=True,
        retryReads=True,
        compressors=['zlib'],
        zlibCompressionLevel=1,
    )


class MongoConnection:
    """Owned MongoDB client, established lazily and re-established on loss.

    Connection strategy:
    1. Return the cached client if it answers a ping
    2. If the ping fails, drop the client and reconnect
    3. After a failed attempt, wait reconnect_delay seconds before the next one
       (callers get None in the meantime instead of blocking)
    """

    def __init__(
        self,
        url: str | None = MONGO_URL,
        database_name: str = DATABASE_NAME,
        reconnect_delay: float = RECONNECT_DELAY_SECONDS,
        client_factory: Callable[[str], MongoClient] = _default_client_factory,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.url = url
        self.database_name = database_name
        self.reconnect_delay = reconnect_delay
        self._client_factory = client_factory
        self._clock = clock
        self._client: MongoClient | None = None
        self._last_failure_at: float | None = None
        self._ever_connected = False
        self._missing_url_logged = False
        self._lock = threading.Lock()

    def get_client(self) -> MongoClient | None:
        """Get a healthy client, reconnecting if needed. None if unavailable.

        Safe to call from several request threads at once: only one thread
        discards a stale client or opens a new one.
        """
        client = self._client
        if client is not None:
            try:
                client.admin.command('ping')
                return client
            except PyMongoError:
                logger.warning("[MONGODB] Cached client failed ping, reconnecting")

        with self._lock:
            if self._client is not None and self._client is not client:
                # Another thread already reconnected
                return self._client
            if self._client is not None:
                self._discard(self._client)
                self._client = None

            if not self.url:
                if not self._missing_url_logged:
                    logger.error("[MONGODB] MONGO_URL not configured.")
                    self._missing_url_logged = True
                return None

            if self._in_backoff():
                return None

            return self._connect()

    def get_database(self) -> Database | None:
        client = self.get_client()
        if client is None:
            return None
        return client[self.database_name]

    def is_connected(self) -> bool:
        return self.get_client() is not None

    def close(self) -> None:
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()
            logger.info("[MONGODB] Connection closed")

    def _in_backoff(self) -> bool:
        if self._last_failure_at is None:
            return False
        return self._clock() - self._last_failure_at < self.reconnect_delay

    @staticmethod
    def _discard(client: MongoClient) -> None:
        """Close a client so its monitor threads and pool are released."""
        try:
            client.close()
        except PyMongoError as e:
            logger.debug("[MONGODB] Error closing client", extra={"error": str(e)[:200]})

    def _connect(self) -> MongoClient | None:
        """Open and ping a new client. Caller holds the lock."""
        client = None
        try:
            logger.info("[MONGODB] Connecting...")
            client = self._client_factory(self.url)
            client.admin.command('ping')
        except (ConnectionFailure, PyMongoError) as e:
            if client is not None:
                self._discard(client)
            self._last_failure_at = self._clock()
            logger.error(
                "[MONGODB] Connection failed, retrying after delay",
                extra={"error": str(e)[:200], "retryInSeconds": self.reconnect_delay},
            )
            return None

        self._client = client
        self._last_failure_at = None
        if self._ever_connected:
            logger.info(f"[MONGODB] Reconnected to {self.database_name}")
        else:
            logger.info(f"[MONGODB] Connected successfully to {self.database_name}")
        self._ever_connected = True
        return client
