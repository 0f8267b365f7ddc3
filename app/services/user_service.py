"""
app/services/user_service.py

Purpose: Credential store access

- Lookups by email, Aadhaar card and phone number
- Record insertion
- No business rules live here; callers map storage errors
"""

from app.db.mongo import get_users_collection
from app.models.user import AADHAR_FIELD, EMAIL_FIELD, PHONE_FIELD
from app.core.logging import get_logger
from typing import Optional, Dict, Any

logger = get_logger(__name__)


async def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """
    Retrieves a user by official email.

    Args:
        email: Official email, matched exactly

    Returns:
        User document or None if not found
    """
    users = get_users_collection()
    return await users.find_one({EMAIL_FIELD: email})


async def get_user_by_aadhaar(aadhaar: str) -> Optional[Dict[str, Any]]:
    users = get_users_collection()
    return await users.find_one({AADHAR_FIELD: aadhaar})


async def get_user_by_phone(phone: str) -> Optional[Dict[str, Any]]:
    users = get_users_collection()
    return await users.find_one({PHONE_FIELD: phone})


async def phone_exists(phone: str) -> bool:
    return await get_user_by_phone(phone) is not None


async def insert_user(document: Dict[str, Any]) -> Any:
    """
    Inserts a new user document.

    Args:
        document: Complete user document (see app.models.user)

    Returns:
        Inserted document id

    Raises:
        pymongo.errors.DuplicateKeyError: If a unique index rejects the insert
    """
    users = get_users_collection()
    result = await users.insert_one(document)
    logger.info(f"User record created: {result.inserted_id}")
    return result.inserted_id
