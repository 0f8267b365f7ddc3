import asyncio

import httpx
import pytest

from app.flow.api_client import RegistrationApiClient
from app.flow.controller import FormController, friendly_registration_error, login
from app.flow.form import ConfirmPasswordChanged, FieldChanged, FormModel, OtpSent, OtpVerified, reduce
from app.flow.states import FormState
from app.main import app
from utils import constants


class RecordingTransport(httpx.MockTransport):
    """Fails every request and remembers that it was made."""

    def __init__(self, error=None):
        self.requests = []
        self.error = error
        super().__init__(self._handle)

    def _handle(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return httpx.Response(500, json={"message": "unexpected call"})


def run(coro):
    return asyncio.run(coro)


def fill(controller, payload):
    for name, value in payload.items():
        controller.change_field(name, value)
    controller.change_confirm_password(payload["newPassword"])


def verified_model(payload):
    model = FormModel()
    for name, value in payload.items():
        model = reduce(model, FieldChanged(name, value))
    model = reduce(model, ConfirmPasswordChanged(payload["newPassword"]))
    model = reduce(model, OtpSent("sess-1"))
    return reduce(model, OtpVerified(True))


@pytest.fixture
def backend(client):
    """Registration client talking to the app in-process."""
    return RegistrationApiClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))


def test_friendly_registration_errors():
    assert friendly_registration_error("Aadhaar card already registered") == constants.PROMPT_AADHAR_TAKEN
    assert friendly_registration_error("Phone number already registered") == constants.PROMPT_PHONE_TAKEN_LOGIN
    assert friendly_registration_error("This email is taken") == constants.PROMPT_EMAIL_TAKEN
    assert friendly_registration_error("Something odd happened") == "Something odd happened"
    assert friendly_registration_error("") == constants.PROMPT_REGISTRATION_UNKNOWN
    assert friendly_registration_error(None) == constants.PROMPT_REGISTRATION_UNKNOWN
    assert friendly_registration_error({"nested": True}) == constants.PROMPT_REGISTRATION_UNKNOWN


@pytest.mark.parametrize("override, expected", [
    ({"aadharCard": "12345"}, constants.PROMPT_AADHAR_FORMAT),
    ({"phoneNumber": "98765"}, constants.PROMPT_PHONE_FORMAT),
    ({"newPassword": "weakpass"}, constants.PROMPT_WEAK_PASSWORD),
])
def test_invalid_submission_makes_no_request(payload, override, expected):
    transport = RecordingTransport()
    controller = FormController(
        RegistrationApiClient(base_url="http://backend", transport=transport),
        verified_model({**payload, **override}),
    )

    assert run(controller.submit()) is False
    assert controller.model.message == expected
    assert controller.model.state == FormState.OTP_VERIFIED
    assert transport.requests == []


def test_password_mismatch_makes_no_request(payload):
    transport = RecordingTransport()
    controller = FormController(
        RegistrationApiClient(base_url="http://backend", transport=transport),
        verified_model(payload),
    )
    controller.change_confirm_password("Different1!")

    assert run(controller.submit()) is False
    assert controller.model.message == constants.PROMPT_PASSWORD_MISMATCH
    assert transport.requests == []


def test_unverified_submission_makes_no_request(payload):
    transport = RecordingTransport()
    controller = FormController(RegistrationApiClient(base_url="http://backend", transport=transport))
    fill(controller, payload)

    assert run(controller.submit()) is False
    assert controller.model.message == constants.PROMPT_VERIFY_PHONE_FIRST
    assert controller.model.state == FormState.EDITING
    assert transport.requests == []


def test_send_otp_without_phone_makes_no_request():
    transport = RecordingTransport()
    controller = FormController(RegistrationApiClient(base_url="http://backend", transport=transport))

    assert run(controller.send_otp()) is False
    assert controller.model.message == constants.PROMPT_ENTER_PHONE
    assert transport.requests == []


def test_submit_connection_error(payload):
    transport = RecordingTransport(error=httpx.ConnectError("refused"))
    controller = FormController(
        RegistrationApiClient(base_url="http://backend", transport=transport),
        verified_model(payload),
    )

    assert run(controller.submit()) is False
    assert controller.model.state == FormState.OTP_VERIFIED
    assert controller.model.message == constants.PROMPT_CONNECTION_ERROR
    assert len(transport.requests) == 1


def test_full_registration_flow(backend, users, provider, payload):
    controller = FormController(backend)
    fill(controller, payload)

    async def flow():
        assert await controller.send_otp()
        assert controller.model.state == FormState.OTP_SENT
        assert controller.model.session_id == "sess-123"

        controller.change_otp("123456")
        assert await controller.verify_otp()
        assert controller.model.state == FormState.OTP_VERIFIED

        assert await controller.submit()

    run(flow())

    assert controller.model.state == FormState.DONE
    assert controller.model.message == constants.REGISTRATION_SUCCESS
    assert len(users.documents) == 1
    assert users.documents[0]["officialEmail"] == payload["officialEmail"]

    user, message = run(login(backend, payload["officialEmail"], payload["newPassword"]))
    assert message == constants.LOGIN_SUCCESS
    assert user["aadharCard"] == payload["aadharCard"]


def test_send_otp_for_registered_phone(backend, provider, registered_user):
    controller = FormController(backend)
    controller.change_field("phoneNumber", registered_user["phoneNumber"])

    assert run(controller.send_otp()) is False
    assert controller.model.state == FormState.EDITING
    assert controller.model.resend_count == 0
    assert controller.model.message == constants.PROMPT_PHONE_TAKEN
    assert provider.calls == []


def test_send_otp_provider_failure(backend, provider, payload):
    provider.send_payload = {"Status": "Error", "Details": "Insufficient balance"}
    controller = FormController(backend)
    fill(controller, payload)

    assert run(controller.send_otp()) is False
    assert controller.model.state == FormState.EDITING
    assert controller.model.message == constants.PROMPT_OTP_SEND_FAILED


def test_wrong_otp(backend, provider, payload):
    provider.verify_payload = {"Status": "Error", "Details": "OTP Mismatch"}
    controller = FormController(backend)
    fill(controller, payload)

    async def flow():
        await controller.send_otp()
        controller.change_otp("000000")
        return await controller.verify_otp()

    assert run(flow()) is False
    assert controller.model.state == FormState.OTP_SENT
    assert controller.model.message == constants.PROMPT_OTP_INVALID


def test_aadhaar_conflict_mapped_to_prompt(backend, provider, registered_user, payload):
    controller = FormController(backend, verified_model({**payload, "phoneNumber": "9123456789"}))

    assert run(controller.submit()) is False
    assert controller.model.state == FormState.OTP_VERIFIED
    assert controller.model.message == constants.PROMPT_AADHAR_TAKEN


def test_login_failure_message(backend, registered_user):
    user, message = run(login(backend, registered_user["officialEmail"], "Wrong123!@"))

    assert user is None
    assert message == constants.INVALID_CREDENTIALS
