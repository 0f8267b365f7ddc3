"""
app/core/security.py

Purpose: Password hashing

- bcrypt via passlib, salted per hash
- Constant-cost dummy check for unknown accounts
"""

from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Spends the same time as a real verification when there is no hash to check."""
    pwd_context.dummy_verify()
