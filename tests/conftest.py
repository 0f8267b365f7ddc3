"""
Pytest configuration and fixtures for the registration backend.

The users collection is replaced by an in-memory async double that enforces
the same unique keys as the real indexes, and the 2Factor API is served by
an httpx.MockTransport so no request leaves the process.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")

import json
from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from app.db import mongo
from app.main import app
from app.services.otp_service import TwoFactorOtpGateway, get_otp_gateway

UNIQUE_FIELDS = ("aadharCard", "phoneNumber")

VALID_REGISTRATION = {
    "officialEmail": "a@x.com",
    "aadharCard": "123456789012",
    "name": "A",
    "course": "CS",
    "phoneNumber": "9876543210",
    "newPassword": "Abc123!@",
}


class FakeUsersCollection:
    """In-memory stand-in for the Motor users collection."""

    def __init__(self):
        self.documents = []
        self.fail_with = None
        # Simulates a concurrent insert landing between lookup and insert
        self.hide_existing = False

    async def find_one(self, filter, *args, **kwargs):
        if self.fail_with:
            raise self.fail_with
        if self.hide_existing:
            return None
        for doc in self.documents:
            if all(doc.get(key) == value for key, value in filter.items()):
                return dict(doc)
        return None

    async def insert_one(self, document):
        if self.fail_with:
            raise self.fail_with
        for field in UNIQUE_FIELDS:
            if any(doc.get(field) == document.get(field) for doc in self.documents):
                raise DuplicateKeyError(
                    f"E11000 duplicate key error collection: voting.users index: {field}_unique",
                    code=11000,
                    details={"keyPattern": {field: 1}, "keyValue": {field: document.get(field)}},
                )
        stored = dict(document)
        stored["_id"] = len(self.documents) + 1
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def create_index(self, keys, **kwargs):
        return kwargs.get("name")

    async def index_information(self):
        return {"_id_": {}}


class FakeTwoFactor:
    """Scripted 2Factor.in API; records every request it receives."""

    def __init__(self):
        self.calls = []
        self.send_status = 200
        self.send_payload = {"Status": "Success", "Details": "sess-123"}
        self.verify_status = 200
        self.verify_payload = {"Status": "Success", "Details": "OTP Matched"}
        self.error = None
        self.raw_body = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(200, content=self.raw_body)
        if "/SMS/VERIFY/" in request.url.path:
            return httpx.Response(self.verify_status, content=json.dumps(self.verify_payload))
        return httpx.Response(self.send_status, content=json.dumps(self.send_payload))


@pytest.fixture
def users(monkeypatch):
    """Fresh users collection for each test."""
    collection = FakeUsersCollection()
    monkeypatch.setattr(mongo, "_database", {mongo.USERS_COLLECTION: collection})
    return collection


@pytest.fixture
def provider():
    """Fake OTP provider wired into the app through the gateway dependency."""
    fake = FakeTwoFactor()
    gateway = TwoFactorOtpGateway(
        api_key="test-key",
        base_url="https://2factor.test",
        template="Test_Template",
        transport=httpx.MockTransport(fake.handler),
    )
    app.dependency_overrides[get_otp_gateway] = lambda: gateway
    yield fake
    app.dependency_overrides.pop(get_otp_gateway, None)


@pytest.fixture
def client(users, provider):
    """Test client; lifespan is not run so no real MongoDB is needed."""
    return TestClient(app)


@pytest.fixture
def payload():
    """A valid registration body."""
    return dict(VALID_REGISTRATION)


@pytest.fixture
def registered_user(client):
    response = client.post("/register", json=VALID_REGISTRATION)
    assert response.status_code == 200
    return dict(VALID_REGISTRATION)
