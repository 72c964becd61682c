"""
Database initialization script for the account service

Run once to create the users collection indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
import logging

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.db.mongo import connect_to_mongo, close_mongo_connection, get_users_collection
from app.db.indexes import create_indexes

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


async def main():
    """Main initialization"""
    logger.info("=" * 60)
    logger.info("  Account Service Database Setup")
    logger.info("=" * 60 + "\n")

    logger.info(f"🔌 Connecting to MongoDB: {settings.MONGODB_DB_NAME}")
    await connect_to_mongo()

    try:
        await create_indexes()

        users = get_users_collection()
        indexes = await users.index_information()
        logger.info(f"\n🔍 {settings.USERS_COLLECTION} indexes:")
        for idx_name in indexes.keys():
            if idx_name != "_id_":
                logger.info(f"    ✅ {idx_name}")

        logger.info(f"\n📊 Users: {await users.count_documents({})}")
        logger.info("\n✅ Database initialization complete!")

    except Exception as e:
        logger.error(f"\n❌ Error: {e}")
        raise

    finally:
        await close_mongo_connection()

    logger.info("\n" + "=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
