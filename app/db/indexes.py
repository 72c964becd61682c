"""
app/db/indexes.py

Purpose: Database index management

- Unique email index backs the one-account-per-email invariant
- Lookup indexes for phone search and session token resolution
"""

from pymongo import ASCENDING

from app.db.mongo import get_users_collection
from app.core.logging import get_logger
from utils.constants import FIELD_EMAIL, FIELD_MOBILE_NUMBER, FIELD_SESSION_TOKENS

logger = get_logger(__name__)


async def create_indexes():
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = get_users_collection()

        logger.info("Creating database indexes...")

        await users.create_index(
            [(FIELD_EMAIL, ASCENDING)],
            unique=True,
            name="email_unique"
        )
        logger.debug("Created unique index on users.email")

        await users.create_index(
            [(FIELD_MOBILE_NUMBER, ASCENDING)],
            name="mobile_number_idx"
        )
        logger.debug("Created index on users.mobile_number")

        # Multikey index, used when logout resolves a user from a bare token
        await users.create_index(
            [(FIELD_SESSION_TOKENS, ASCENDING)],
            name="session_tokens_idx"
        )
        logger.debug("Created index on users.session_tokens")

        user_indexes = await users.index_information()
        logger.info(f"✅ Database indexes ready: {sorted(user_indexes.keys())}")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    """
    Run this script directly to create indexes manually.
    """
    import asyncio
    from app.db.mongo import connect_to_mongo, close_mongo_connection

    async def main():
        await connect_to_mongo()
        await create_indexes()
        await close_mongo_connection()

    asyncio.run(main())
