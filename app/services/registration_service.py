"""
app/services/registration_service.py

Purpose: Voter registration

- Field presence and format checks
- Aadhaar / phone uniqueness (Aadhaar checked first)
- Password hashing and record creation
- Storage races resolved by the unique indexes
"""

from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import ConflictError, UnexpectedError, ValidationError
from app.core.logging import get_logger, LogContext, mask_phone
from app.core.security import get_password_hash
from app.models.user import AADHAR_FIELD, PHONE_FIELD, build_user_document
from app.schemas.user import RegisterRequest
from app.services import user_service
from utils import constants
from utils.validation_utils import validate_aadhaar, validate_phone_number

logger = get_logger(__name__)


def aadhaar_conflict() -> ConflictError:
    return ConflictError(constants.AADHAR_ALREADY_REGISTERED, field=AADHAR_FIELD)


def phone_conflict() -> ConflictError:
    return ConflictError(constants.PHONE_ALREADY_REGISTERED, field=PHONE_FIELD)


def conflict_from_duplicate_key(error: DuplicateKeyError) -> ConflictError:
    """
    Maps a unique-index rejection to the conflict for the colliding key.
    """
    details = error.details or {}
    key_pattern = details.get("keyPattern") or details.get("keyValue") or {}
    if AADHAR_FIELD in key_pattern:
        return aadhaar_conflict()
    if PHONE_FIELD in key_pattern:
        return phone_conflict()

    # Older servers only report the index name in the message
    message = str(error)
    if AADHAR_FIELD in message:
        return aadhaar_conflict()
    return phone_conflict()


async def register_user(request: RegisterRequest) -> dict:
    """
    Registers a voter.

    Args:
        request: Validated registration body

    Returns:
        {"message": "Registration successful!"}

    Raises:
        ValidationError: Aadhaar or phone malformed, or a field blank after trimming
        ConflictError: Aadhaar or phone already registered
        UnexpectedError: Storage failure
    """
    aadhaar = request.aadharCard.strip()
    phone = request.phoneNumber.strip()

    blank = [
        field
        for field, value in (
            ("officialEmail", request.officialEmail.strip()),
            ("aadharCard", aadhaar),
            ("name", request.name.strip()),
            ("course", request.course.strip()),
            ("phoneNumber", phone),
        )
        if not value
    ]
    if blank:
        raise ValidationError(f"{constants.MISSING_FIELDS}: {', '.join(blank)}")

    if not validate_aadhaar(aadhaar):
        raise ValidationError(constants.INVALID_AADHAR, details={"field": AADHAR_FIELD})
    if not validate_phone_number(phone):
        raise ValidationError(constants.INVALID_PHONE, details={"field": PHONE_FIELD})

    with LogContext(email=request.officialEmail, phone=mask_phone(phone)):
        try:
            if await user_service.get_user_by_aadhaar(aadhaar):
                logger.info("Registration rejected: Aadhaar already registered")
                raise aadhaar_conflict()

            if await user_service.get_user_by_phone(phone):
                logger.info("Registration rejected: phone already registered")
                raise phone_conflict()

            document = build_user_document(
                official_email=request.officialEmail,
                aadhar_card=aadhaar,
                name=request.name,
                course=request.course,
                phone_number=phone,
                password_hash=get_password_hash(request.newPassword),
            )
            await user_service.insert_user(document)

        except DuplicateKeyError as e:
            logger.warning(f"Concurrent registration rejected by unique index: {e}")
            raise conflict_from_duplicate_key(e) from e
        except PyMongoError as e:
            logger.error(f"Registration storage error: {e}", exc_info=True)
            raise UnexpectedError(constants.REGISTRATION_FAILED) from e

        logger.info("Registration successful")

    return {"message": constants.REGISTRATION_SUCCESS}
