"""
app/services/auth_service.py

Purpose: Login and admin lookup

- Email + password verification against the stored bcrypt hash
- A single undifferentiated error for unknown email and wrong password
- Admin profile lookup by email
"""

from typing import Optional
from pymongo.errors import PyMongoError

from app.core.exceptions import AuthError, NotFoundError, UnexpectedError
from app.core.logging import get_logger, LogContext
from app.core.security import dummy_verify, verify_password
from app.models.user import PASSWORD_HASH_FIELD, to_admin_profile, to_user_projection
from app.schemas.user import AdminProfile, LoginResponse
from app.services import user_service
from utils import constants

logger = get_logger(__name__)


async def authenticate(email: Optional[str], password: Optional[str]) -> LoginResponse:
    """
    Verifies login credentials.

    Args:
        email: Official email
        password: Plaintext password

    Returns:
        LoginResponse with the user projection (no password hash)

    Raises:
        AuthError: Unknown email or wrong password (same message for both)
        UnexpectedError: Storage failure
    """
    with LogContext(email=email):
        try:
            user = await user_service.get_user_by_email(email) if email else None
        except PyMongoError as e:
            logger.error(f"Login lookup failed: {e}", exc_info=True)
            raise UnexpectedError(constants.LOGIN_FAILED) from e

        if user is None:
            dummy_verify()
            logger.info("Login rejected")
            raise AuthError(constants.INVALID_CREDENTIALS)

        if not verify_password(password or "", user[PASSWORD_HASH_FIELD]):
            logger.info("Login rejected")
            raise AuthError(constants.INVALID_CREDENTIALS)

        logger.info("Login successful")
        return LoginResponse(message=constants.LOGIN_SUCCESS, user=to_user_projection(user))


async def get_admin_profile(email: str) -> AdminProfile:
    """
    Looks up a registered user's profile by email.

    Raises:
        NotFoundError: No user with that email
        UnexpectedError: Storage failure
    """
    try:
        user = await user_service.get_user_by_email(email)
    except PyMongoError as e:
        logger.error(f"Admin lookup failed: {e}", exc_info=True)
        raise UnexpectedError(constants.SERVER_ERROR) from e

    if user is None:
        raise NotFoundError(constants.ADMIN_NOT_FOUND)

    return to_admin_profile(user)
