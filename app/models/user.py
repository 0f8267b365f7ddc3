"""
app/models/user.py

Purpose: User document model

- Field names as stored in the users collection
- Document construction at registration
- Projections that never carry the password hash
"""

from datetime import datetime
from typing import Any, Dict

from app.schemas.user import AdminProfile, UserProjection

EMAIL_FIELD = "officialEmail"
AADHAR_FIELD = "aadharCard"
PHONE_FIELD = "phoneNumber"
PASSWORD_HASH_FIELD = "passwordHash"


def build_user_document(
    official_email: str,
    aadhar_card: str,
    name: str,
    course: str,
    phone_number: str,
    password_hash: str,
) -> Dict[str, Any]:
    return {
        EMAIL_FIELD: official_email,
        AADHAR_FIELD: aadhar_card,
        "name": name,
        "course": course,
        PHONE_FIELD: phone_number,
        PASSWORD_HASH_FIELD: password_hash,
        "createdAt": datetime.utcnow(),
    }


def to_user_projection(user: Dict[str, Any]) -> UserProjection:
    """Projection returned on login."""
    return UserProjection(
        officialEmail=user[EMAIL_FIELD],
        name=user["name"],
        aadharCard=user[AADHAR_FIELD],
        phoneNumber=user[PHONE_FIELD],
    )


def to_admin_profile(user: Dict[str, Any]) -> AdminProfile:
    """Projection returned by the admin lookup."""
    return AdminProfile(
        name=user["name"],
        officialEmail=user[EMAIL_FIELD],
        aadharCard=user[AADHAR_FIELD],
        course=user["course"],
        phoneNumber=user[PHONE_FIELD],
    )
