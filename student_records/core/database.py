import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# DATABASE HANDLE
# =============================================================================

class MongoDatabase:
    """
    Explicit handle around a MongoClient.

    The FastAPI lifespan opens it at startup and closes it at shutdown;
    routes receive it (or the store built on it) through dependencies
    instead of importing a module-level connection.
    """

    def __init__(
        self,
        uri: str = settings.MONGODB_URI,
        db_name: str = settings.MONGODB_DB,
        timeout_ms: int = settings.MONGODB_TIMEOUT_MS,
        client: Optional[MongoClient] = None,
    ):
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self._client = client

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            raise RuntimeError("Database is not connected, call connect() first")
        return self._client

    @property
    def db(self) -> Database:
        return self.client[self.db_name]

    def connect(self) -> "MongoDatabase":
        """
        Create the MongoClient.

        The client connects lazily, so this does not fail when the server
        is down; use check_connection() to verify connectivity.
        """
        if self._client is None:
            self._client = MongoClient(
                self.uri,
                serverSelectionTimeoutMS=self.timeout_ms,  # Bound every operation's wait for a server
                tz_aware=True,
            )
            logger.info(f"MongoDB client created for database '{self.db_name}'")
        return self

    def get_collection(self, name: str) -> Collection:
        return self.db[name]

    def check_connection(self) -> bool:
        """
        Check if database connection is working.

        Returns:
            bool: True if connection successful, False otherwise
        """
        try:
            self.client.admin.command("ping")
            logger.info("MongoDB connection successful")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB connection failed: {e}")
            return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("MongoDB client closed")


# =============================================================================
# TEST DATABASE CONNECTION
# =============================================================================

if __name__ == "__main__":
    """Test database connection when running this file directly."""
    logging.basicConfig(level=logging.INFO)

    from .config import print_config
    print_config()

    database = MongoDatabase().connect()
    try:
        if database.check_connection():
            print("Connection successful!")
        else:
            print("Connection failed!")
    finally:
        database.close()
