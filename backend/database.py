"""
Database connection management for MongoDB.
"""

import logging
import time
from functools import lru_cache
from typing import Optional

import certifi
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from env import (
    DB_CONNECT_RETRIES,
    DB_CONNECT_RETRY_DELAY,
    MONGODB_DATABASE_NAME,
    MONGODB_URI,
)

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Singleton database connection manager.
    Provides connection pooling and lifecycle management.
    """

    _instance: Optional["DatabaseManager"] = None
    _client: Optional[MongoClient] = None
    _database: Optional[Database] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def connect(self, uri: Optional[str] = None, database_name: Optional[str] = None) -> None:
        """
        Establish connection to MongoDB.

        Args:
            uri: MongoDB connection URI. Uses MONGODB_URI from env if not provided.
            database_name: Database name. Uses MONGODB_DATABASE_NAME from env if not provided.
        """
        if self._client is None:
            connection_uri = uri or MONGODB_URI
            if not connection_uri:
                raise ValueError("MongoDB URI not provided and MONGODB_URI not set")

            db_name = database_name or MONGODB_DATABASE_NAME
            if not db_name:
                raise ValueError("Database name not provided and MONGODB_DATABASE_NAME not set")

            options = {
                "serverSelectionTimeoutMS": 5000,
                "connectTimeoutMS": 10000,
                "heartbeatFrequencyMS": 10000,
            }

            # mongodb+srv:// (Atlas) automatically uses TLS/SSL
            if "mongodb+srv://" in connection_uri:
                if "retryWrites" not in connection_uri:
                    separator = "&" if "?" in connection_uri else "?"
                    connection_uri = f"{connection_uri}{separator}retryWrites=true&w=majority"
                # Use certifi for SSL certificate validation (helps on macOS)
                options["tlsCAFile"] = certifi.where()

            self._client = MongoClient(connection_uri, **options)
            self._database = self._client[db_name]

    def connect_with_retry(
        self,
        retries: int = DB_CONNECT_RETRIES,
        delay: float = DB_CONNECT_RETRY_DELAY,
    ) -> bool:
        """
        Connect and ping the server, retrying on failure.

        Args:
            retries: Maximum number of attempts
            delay: Seconds to wait between attempts

        Returns:
            True once the server answered a ping, False after all attempts failed
        """
        for attempt in range(1, retries + 1):
            try:
                logger.info("Connecting to MongoDB (attempt %d/%d)", attempt, retries)
                self.connect()
                self.client.admin.command("ping")
                logger.info("MongoDB connection successful")
                return True
            except PyMongoError as e:
                logger.error("MongoDB connection failed: %s", e)
                self.disconnect()
                if attempt < retries:
                    logger.info("Retrying in %.1f seconds", delay)
                    time.sleep(delay)

        logger.error("Could not connect to MongoDB after %d attempts", retries)
        return False

    def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._database = None

    def is_connected(self) -> bool:
        """Ping the server; used by the health check."""
        if self._client is None:
            return False
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError:
            return False

    def ensure_indexes(self) -> None:
        """Create the indexes used by report listing and admin login."""
        reports = self.database["reports"]
        reports.create_index([("analysis.category", ASCENDING)])
        reports.create_index([("status", ASCENDING)])
        reports.create_index([("created_at", DESCENDING)])

        admins = self.database["admins"]
        admins.create_index([("username", ASCENDING)], unique=True)

    @property
    def client(self) -> MongoClient:
        """Get MongoDB client instance."""
        if self._client is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._client

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._database


@lru_cache
def get_database_manager() -> DatabaseManager:
    """
    Get singleton DatabaseManager instance.
    Cached for dependency injection.

    Returns:
        DatabaseManager instance
    """
    return DatabaseManager()


def get_database() -> Database:
    """
    Get database instance for dependency injection.

    Returns:
        MongoDB database instance
    """
    manager = get_database_manager()
    return manager.database
