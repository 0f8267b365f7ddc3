"""
app/schemas/user.py

Purpose: Request and response bodies for the registration API

- Field names match the JSON contract used by the registration form
- Password hashes never appear in any response model
"""

from pydantic import BaseModel, Field
from typing import Optional


class RegisterRequest(BaseModel):
    officialEmail: str = Field(..., min_length=1)
    aadharCard: str = Field(..., min_length=1, description="12-digit Aadhaar number")
    name: str = Field(..., min_length=1)
    course: str = Field(..., min_length=1)
    phoneNumber: str = Field(..., min_length=1, description="10-digit mobile number")
    newPassword: str = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "officialEmail": "a@x.com",
                "aadharCard": "123456789012",
                "name": "A",
                "course": "CS",
                "phoneNumber": "9876543210",
                "newPassword": "Abc123!@"
            }
        }


class LoginRequest(BaseModel):
    """
    Missing or null values fail as bad credentials, not as 400s.
    """
    officialEmail: Optional[str] = None
    password: Optional[str] = None


class PhoneRequest(BaseModel):
    phoneNumber: Optional[str] = None


class VerifyOtpRequest(BaseModel):
    sessionId: Optional[str] = None
    otp: Optional[str] = None


class UserProjection(BaseModel):
    officialEmail: str
    name: str
    aadharCard: str
    phoneNumber: str


class AdminProfile(BaseModel):
    name: str
    officialEmail: str
    aadharCard: str
    course: str
    phoneNumber: str


class LoginResponse(BaseModel):
    message: str
    user: UserProjection


class SendOtpResponse(BaseModel):
    message: str
    sessionId: str


class VerifyOtpResponse(BaseModel):
    verified: bool
    message: str
