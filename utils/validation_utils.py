"""
utils/validation_utils.py

Purpose: Input validation

- Aadhaar and phone number format checks
- Password strength policy and rating
- Digit-only input normalization
"""

import re
from typing import Optional

AADHAR_LENGTH = 12
PHONE_LENGTH = 10

PASSWORD_SYMBOLS = "@$!%*?&"

STRONG_PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$")

# Rating patterns for the strength indicator
STRONG_RATING_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&]).{8,}$")
MEDIUM_RATING_PATTERN = re.compile(r"^(?=.*[A-Z])(?=.*\d).{6,}$")


def digits_only(value: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Strips every non-digit character and optionally truncates.

    Args:
        value: Raw input
        max_length: Keep at most this many digits

    Returns:
        Digit string (possibly empty)
    """
    if not value:
        return ""

    digits = re.sub(r"\D", "", value)
    if max_length is not None:
        digits = digits[:max_length]
    return digits


def validate_aadhaar(aadhaar: Optional[str]) -> bool:
    """
    Validates Aadhaar number format (exactly 12 digits).

    Args:
        aadhaar: Aadhaar number string

    Returns:
        True if valid
    """
    if not aadhaar:
        return False

    return bool(re.fullmatch(r"\d{12}", aadhaar))


def validate_phone_number(phone: Optional[str]) -> bool:
    """
    Validates mobile number format (exactly 10 digits, no country code).

    Args:
        phone: Phone number string

    Returns:
        True if valid
    """
    if not phone:
        return False

    return bool(re.fullmatch(r"\d{10}", phone))


def validate_password_strength(password: Optional[str]) -> bool:
    """
    Checks the registration password policy: at least 8 characters, one
    uppercase letter, one digit and one of @$!%*?&, drawn only from letters,
    digits and those symbols.
    """
    if not password:
        return False

    return bool(STRONG_PASSWORD_PATTERN.match(password))


def evaluate_password_strength(password: Optional[str]) -> str:
    """
    Rates a password for the strength indicator.

    Returns:
        "strong", "medium", "weak", or "" for empty input
    """
    if not password:
        return ""

    if STRONG_RATING_PATTERN.match(password):
        return "strong"
    if MEDIUM_RATING_PATTERN.match(password):
        return "medium"
    return "weak"
