"""
app/flow/controller.py

Purpose: Drives the registration form against the backend

- Runs the guards before any network call
- Send OTP = check-phone then send-otp
- Maps backend messages to friendly prompts
- Every outcome is applied to the form through the reducer
"""

import httpx
from typing import Any, Dict, Optional, Tuple

from app.core.logging import get_logger
from app.flow.api_client import ApiError, RegistrationApiClient
from app.flow.form import (
    ConfirmPasswordChanged,
    FieldChanged,
    FormEvent,
    FormModel,
    OtpChanged,
    OtpSent,
    OtpVerified,
    Rejected,
    SubmitFailed,
    SubmitStarted,
    SubmitSucceeded,
    Tick,
    reduce,
    send_otp_blocker,
    submission_blocker,
    verify_otp_blocker,
)
from utils import constants

logger = get_logger(__name__)


def friendly_registration_error(message: Any) -> str:
    """
    Maps a backend registration error to a prompt for the user.

    Unrecognized messages are shown as they are; anything that is not a
    usable string becomes a generic failure.
    """
    if not isinstance(message, str) or not message.strip():
        return constants.PROMPT_REGISTRATION_UNKNOWN

    if "Aadhaar" in message:
        return constants.PROMPT_AADHAR_TAKEN
    if "Phone" in message:
        return constants.PROMPT_PHONE_TAKEN_LOGIN
    if "email" in message:
        return constants.PROMPT_EMAIL_TAKEN
    return message


class FormController:
    """
    Owns one registration form and the client used to submit it.
    """

    def __init__(
        self,
        client: Optional[RegistrationApiClient] = None,
        model: Optional[FormModel] = None,
    ):
        self.client = client or RegistrationApiClient()
        self.model = model or FormModel()

    def dispatch(self, event: FormEvent) -> FormModel:
        self.model = reduce(self.model, event)
        return self.model

    def change_field(self, name: str, value: str) -> FormModel:
        return self.dispatch(FieldChanged(name, value))

    def change_confirm_password(self, value: str) -> FormModel:
        return self.dispatch(ConfirmPasswordChanged(value))

    def change_otp(self, value: str) -> FormModel:
        return self.dispatch(OtpChanged(value))

    def tick(self, elapsed: float) -> FormModel:
        return self.dispatch(Tick(elapsed))

    async def send_otp(self) -> bool:
        """
        Checks availability, then requests an OTP for the form's phone number.

        Returns:
            True if an OTP session was started
        """
        blocker = send_otp_blocker(self.model)
        if blocker:
            self.dispatch(Rejected(blocker))
            return False

        phone = self.model.value("phoneNumber")
        try:
            await self.client.check_phone(phone)
            result = await self.client.send_otp(phone)
        except ApiError as e:
            logger.info(f"Send OTP rejected: {e.message}")
            if e.status_code == 400 and "registered" in e.message:
                self.dispatch(Rejected(constants.PROMPT_PHONE_TAKEN))
            else:
                self.dispatch(Rejected(constants.PROMPT_OTP_SEND_FAILED))
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Send OTP failed: {e.__class__.__name__}")
            self.dispatch(Rejected(constants.PROMPT_OTP_SEND_FAILED))
            return False

        session_id = result.get("sessionId")
        if not session_id:
            self.dispatch(Rejected(constants.PROMPT_OTP_SEND_FAILED))
            return False

        self.dispatch(OtpSent(session_id, result.get("message") or constants.PROMPT_OTP_SENT))
        return True

    async def verify_otp(self) -> bool:
        """
        Verifies the entered code against the current OTP session.

        Returns:
            True if the phone number is now verified
        """
        blocker = verify_otp_blocker(self.model)
        if blocker:
            self.dispatch(Rejected(blocker))
            return False

        try:
            result = await self.client.verify_otp(self.model.session_id, self.model.otp.strip())
        except ApiError as e:
            if e.status_code == 400:
                self.dispatch(OtpVerified(False))
            else:
                self.dispatch(Rejected(constants.PROMPT_OTP_VERIFY_FAILED))
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Verify OTP failed: {e.__class__.__name__}")
            self.dispatch(Rejected(constants.PROMPT_OTP_VERIFY_FAILED))
            return False

        verified = result.get("verified") is True
        self.dispatch(OtpVerified(verified))
        return verified

    async def submit(self) -> bool:
        """
        Submits the registration once every client-side check passes.

        Returns:
            True if the backend created the account
        """
        blocker = submission_blocker(self.model)
        if blocker:
            self.dispatch(Rejected(blocker))
            return False

        payload = dict(self.model.fields)
        self.dispatch(SubmitStarted())

        try:
            result = await self.client.register(payload)
        except ApiError as e:
            self.dispatch(SubmitFailed(friendly_registration_error(e.message)))
            return False
        except httpx.HTTPError as e:
            logger.warning(f"Registration request failed: {e.__class__.__name__}")
            self.dispatch(SubmitFailed(constants.PROMPT_CONNECTION_ERROR))
            return False

        self.dispatch(SubmitSucceeded(result.get("message") or constants.REGISTRATION_SUCCESS))
        return True


async def login(
    client: RegistrationApiClient,
    email: str,
    password: str,
) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Logs in through the backend.

    Returns:
        (user projection, message) on success, (None, message) on failure
    """
    try:
        result = await client.login(email, password)
    except ApiError as e:
        return None, e.message or constants.PROMPT_LOGIN_FAILED
    except httpx.HTTPError:
        return None, constants.PROMPT_CONNECTION_ERROR

    return result.get("user"), result.get("message") or constants.LOGIN_SUCCESS
