"""
app/services/otp_service.py

Purpose: SMS OTP gateway (2Factor.in)

- Phone availability check against the users collection
- AUTOGEN OTP send, returning the provider session id
- OTP verification by session id
- No local OTP state and no retries; failures surface immediately
"""

import re
import httpx
from typing import Any, Dict, Optional
from urllib.parse import quote
from pymongo.errors import PyMongoError

from app.core.config import settings
from app.core.exceptions import ConflictError, ProviderError, UnexpectedError, ValidationError
from app.core.logging import get_logger, LogContext, mask_phone
from app.models.user import PHONE_FIELD
from app.services import user_service
from utils import constants
from utils.validation_utils import validate_phone_number

logger = get_logger(__name__)

PROVIDER_SUCCESS = "Success"

# Provider session ids are UUIDs; codes are plain digits
SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9-]+")
OTP_PATTERN = re.compile(r"[0-9]+")


class TwoFactorOtpGateway:
    """Thin proxy to the 2Factor.in SMS OTP API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        template: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.TWO_FACTOR_API_KEY
        self.base_url = (base_url or settings.TWO_FACTOR_BASE_URL).rstrip("/")
        self.template = template or settings.TWO_FACTOR_OTP_TEMPLATE
        self.timeout = timeout if timeout is not None else settings.OTP_PROVIDER_TIMEOUT
        self._transport = transport

    def is_configured(self) -> bool:
        """Check if the provider key is set"""
        return bool(self.api_key)

    async def check_phone_available(self, phone: Optional[str]) -> Dict[str, Any]:
        """
        Confirms a phone number is well formed and not yet registered.

        Returns:
            {"message": "Phone number available"}

        Raises:
            ValidationError: Not exactly 10 digits
            ConflictError: Already registered
        """
        if not validate_phone_number(phone):
            raise ValidationError(constants.INVALID_PHONE, details={"field": PHONE_FIELD})

        try:
            exists = await user_service.phone_exists(phone)
        except PyMongoError as e:
            logger.error(f"Phone availability check failed: {e}", exc_info=True)
            raise UnexpectedError(constants.PHONE_CHECK_FAILED) from e

        if exists:
            raise ConflictError(constants.PHONE_ALREADY_REGISTERED, field=PHONE_FIELD)

        return {"message": constants.PHONE_AVAILABLE}

    async def send(self, phone: Optional[str]) -> str:
        """
        Sends an auto-generated OTP to a phone number.

        The number is checked against the users collection first so that
        registered numbers never consume provider quota.

        Args:
            phone: 10-digit mobile number

        Returns:
            Provider session id

        Raises:
            ValidationError: Not exactly 10 digits
            ConflictError: Already registered
            ProviderError: Provider reported a failure
            UnexpectedError: Network failure or unreadable provider reply
        """
        await self.check_phone_available(phone)

        url = f"{self.base_url}/API/V1/{self.api_key}/SMS/{phone}/AUTOGEN/{self.template}"

        with LogContext(phone=mask_phone(phone)):
            logger.info("Sending OTP")
            payload = await self._call(url, constants.OTP_SEND_ERROR)

            if payload.get("Status") != PROVIDER_SUCCESS or not payload.get("Details"):
                logger.warning(f"OTP provider rejected send: {payload}")
                raise ProviderError(constants.OTP_SEND_FAILED, details=payload)

            session_id = str(payload["Details"])
            logger.info("OTP sent", extra={"session_id": session_id[:8]})
            return session_id

    async def verify(self, session_id: Optional[str], otp: Optional[str]) -> bool:
        """
        Verifies an OTP against its provider session.

        Returns:
            True when the provider accepts the code

        Raises:
            ValidationError: Session id or OTP missing or malformed
            ProviderError: Wrong or expired code
            UnexpectedError: Network failure or unreadable provider reply
        """
        if not session_id or not otp:
            raise ValidationError(constants.OTP_FIELDS_MISSING)

        # Both values become path segments of the provider URL
        if not SESSION_ID_PATTERN.fullmatch(session_id) or not OTP_PATTERN.fullmatch(otp):
            logger.warning("Rejected malformed OTP verification request")
            raise ValidationError(constants.OTP_INVALID, details={"verified": False})

        url = (
            f"{self.base_url}/API/V1/{self.api_key}/SMS/VERIFY/"
            f"{quote(session_id, safe='')}/{quote(otp, safe='')}"
        )

        with LogContext(session_id=session_id[:8]):
            payload = await self._call(url, constants.OTP_VERIFY_ERROR)

            if payload.get("Status") != PROVIDER_SUCCESS:
                logger.info(f"OTP verification failed: {payload.get('Details')}")
                raise ProviderError(
                    constants.OTP_INVALID,
                    details={"verified": False, "provider": payload},
                )

            logger.info("OTP verified")
            return True

    async def _call(self, url: str, failure_message: str) -> Dict[str, Any]:
        """
        Issues a provider GET and returns the decoded JSON body.

        Non-2xx replies with a JSON body are returned as-is; the provider
        reports failures in the "Status" field.
        """
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"OTP provider request failed: {e.__class__.__name__}")
            raise UnexpectedError(failure_message) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"OTP provider returned non-JSON reply ({response.status_code})")
            raise UnexpectedError(failure_message) from e

        if not isinstance(payload, dict):
            logger.error(f"OTP provider returned unexpected reply ({response.status_code})")
            raise UnexpectedError(failure_message)

        return payload


# Singleton instance
otp_gateway = TwoFactorOtpGateway()


def get_otp_gateway() -> TwoFactorOtpGateway:
    """FastAPI dependency returning the shared gateway."""
    return otp_gateway
