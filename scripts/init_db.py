"""
Database initialization script

Run once to create the users collection indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.indexes import create_indexes
from app.db.mongo import close_mongo_connection, connect_to_mongo, get_users_collection

setup_logging()
logger = get_logger("init_db")


async def main():
    """Main initialization"""
    logger.info("=" * 60)
    logger.info(f"  Voter registration database setup ({settings.MONGODB_DB_NAME})")
    logger.info("=" * 60)

    await connect_to_mongo()
    try:
        await create_indexes()

        users = get_users_collection()
        indexes = await users.index_information()
        for idx_name in indexes.keys():
            if idx_name != "_id_":
                logger.info(f"  index: {idx_name}")

        logger.info(f"Registered users: {await users.count_documents({})}")
        logger.info("Database initialization complete")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    asyncio.run(main())
