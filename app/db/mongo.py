"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Motor client lifecycle (connect with retries, close)
- Liveness ping for the health endpoint
- Access to the user accounts collection
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError
from typing import Optional
import asyncio
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Global MongoDB client
_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


async def connect_to_mongo():
    """
    Opens the Motor client and pings the server, retrying with
    exponential backoff. Called during application startup.

    Raises:
        ConnectionError: If every attempt fails
    """
    global _client, _database

    if _client is not None:
        logger.warning("MongoDB client already initialized")
        return

    attempts = max(1, settings.MONGODB_CONNECT_RETRIES)
    delay = 1

    for attempt in range(1, attempts + 1):
        client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            retryWrites=True,
        )
        try:
            await client.admin.command("ping")
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            client.close()
            logger.error(f"MongoDB ping failed (attempt {attempt}/{attempts}): {e}")
            if attempt == attempts:
                raise ConnectionError("Could not establish MongoDB connection") from e
            await asyncio.sleep(delay)
            delay *= 2
            continue

        _client = client
        _database = client[settings.MONGODB_DB_NAME]
        logger.info(f"Connected to MongoDB database {settings.MONGODB_DB_NAME}")
        return


async def close_mongo_connection():
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    global _client, _database

    if _client:
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


async def check_database_health() -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    if _client is None:
        return False
    try:
        await _client.admin.command("ping")
    except PyMongoError as e:
        logger.error(f"Database health check failed: {e}")
        return False
    return True


def get_users_collection():
    """
    Returns the user accounts collection.

    Schema Fields:
    - name: str
    - email: str (unique)
    - address: str
    - password_hash: str (bcrypt)
    - mobile_number: str
    - session_tokens: list[str] (tokens issued by login, not yet revoked)
    - created_at: datetime
    - last_login_at: datetime
    """
    if _database is None:
        raise RuntimeError(
            "Database not initialized. Call connect_to_mongo() during startup."
        )
    return _database[settings.USERS_COLLECTION]
