"""
app/db/indexes.py

Purpose: Database index management

- Unique indexes on Aadhaar card and phone number
- Lookup index on official email
"""

from pymongo import ASCENDING

from app.db.mongo import get_users_collection
from app.core.logging import get_logger

logger = get_logger(__name__)

AADHAR_INDEX = "aadharCard_unique"
PHONE_INDEX = "phoneNumber_unique"
EMAIL_INDEX = "officialEmail_idx"


async def create_indexes():
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = get_users_collection()

        logger.info("Creating database indexes...")

        # The unique indexes are what settles concurrent duplicate registrations
        await users.create_index([("aadharCard", ASCENDING)], unique=True, name=AADHAR_INDEX)
        logger.debug("Created unique index on users.aadharCard")

        await users.create_index([("phoneNumber", ASCENDING)], unique=True, name=PHONE_INDEX)
        logger.debug("Created unique index on users.phoneNumber")

        await users.create_index([("officialEmail", ASCENDING)], name=EMAIL_INDEX)
        logger.debug("Created index on users.officialEmail")

        user_indexes = await users.index_information()
        logger.info(f"All database indexes created (users={len(user_indexes)})")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise
