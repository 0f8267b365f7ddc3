"""
app/api/otp.py

Purpose: Phone verification endpoints

- POST /check-phone   availability before spending an OTP
- POST /send-otp      returns the provider session id
- POST /verify-otp    checks a code against its session

Note: /check-phone, /send-otp and /register are separate calls, so a number
can be registered by someone else between them. /send-otp repeats the
availability check and the unique index on phoneNumber is the final word.
"""

from fastapi import APIRouter, Depends

from app.core.logging import get_logger
from app.schemas.response import MessageResponse
from app.schemas.user import PhoneRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse
from app.services.otp_service import TwoFactorOtpGateway, get_otp_gateway
from utils import constants

logger = get_logger(__name__)
router = APIRouter()


@router.post("/check-phone", response_model=MessageResponse)
async def check_phone(
    body: PhoneRequest,
    gateway: TwoFactorOtpGateway = Depends(get_otp_gateway),
):
    return await gateway.check_phone_available(body.phoneNumber)


@router.post("/send-otp", response_model=SendOtpResponse)
async def send_otp(
    body: PhoneRequest,
    gateway: TwoFactorOtpGateway = Depends(get_otp_gateway),
):
    """
    Sends an OTP to an unregistered 10-digit phone number.
    """
    session_id = await gateway.send(body.phoneNumber)
    return SendOtpResponse(message=constants.OTP_SENT, sessionId=session_id)


@router.post("/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(
    body: VerifyOtpRequest,
    gateway: TwoFactorOtpGateway = Depends(get_otp_gateway),
):
    verified = await gateway.verify(body.sessionId, body.otp)
    return VerifyOtpResponse(verified=verified, message=constants.OTP_VERIFIED)
