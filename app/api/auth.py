"""
app/api/auth.py

Purpose: Registration, login and admin lookup endpoints

- POST /register
- POST /login
- GET  /api/admin/{email}
- Business rules live in the services; errors render via app.core.errors
"""

from fastapi import APIRouter

from app.core.logging import get_logger
from app.schemas.response import MessageResponse
from app.schemas.user import AdminProfile, LoginRequest, LoginResponse, RegisterRequest
from app.services import auth_service, registration_service

logger = get_logger(__name__)
router = APIRouter()


@router.post("/register", response_model=MessageResponse)
async def register(body: RegisterRequest):
    """
    Creates a voter account once the phone number has been verified.
    """
    return await registration_service.register_user(body)


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest):
    """
    Checks email and password; returns the user without the password hash.
    """
    return await auth_service.authenticate(body.officialEmail, body.password)


@router.get("/api/admin/{email}", response_model=AdminProfile)
async def get_admin(email: str):
    return await auth_service.get_admin_profile(email)
