"""
app/flow/api_client.py

Purpose: HTTP client for the registration backend

- One method per backend endpoint used by the registration form
- Non-2xx replies raise ApiError carrying the backend's message
- Transport failures propagate as httpx errors
"""

import httpx
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Backend replied with an error status."""

    def __init__(self, status_code: int, message: str, payload: Optional[Any] = None):
        self.status_code = status_code
        self.message = message
        self.payload = payload
        super().__init__(f"{status_code}: {message}")


class RegistrationApiClient:
    """Async client for the registration backend"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.BACKEND_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def check_phone(self, phone: str) -> Dict[str, Any]:
        return await self._request("POST", "/check-phone", json={"phoneNumber": phone})

    async def send_otp(self, phone: str) -> Dict[str, Any]:
        return await self._request("POST", "/send-otp", json={"phoneNumber": phone})

    async def verify_otp(self, session_id: str, otp: str) -> Dict[str, Any]:
        return await self._request("POST", "/verify-otp", json={"sessionId": session_id, "otp": otp})

    async def register(self, payload: Dict[str, str]) -> Dict[str, Any]:
        return await self._request("POST", "/register", json=payload)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request("POST", "/login", json={"officialEmail": email, "password": password})

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, **kwargs)

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_success:
            return payload if isinstance(payload, dict) else {}

        message = ""
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            message = payload["message"]

        logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
        raise ApiError(response.status_code, message, payload)
