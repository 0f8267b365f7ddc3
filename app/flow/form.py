"""
app/flow/form.py

Purpose: Registration form state and reducer

- Immutable FormModel holding field values, OTP session and resend limits
- Events describing user input and backend outcomes
- reduce(model, event) -> new model, with no I/O
- Guards that decide whether send / verify / submit may go ahead

The async controller (app/flow/controller.py) performs the network calls and
feeds their outcomes back in as events.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Union

from app.core.config import settings
from app.flow.states import FormState, is_valid_transition
from utils import constants
from utils.validation_utils import (
    AADHAR_LENGTH,
    PHONE_LENGTH,
    digits_only,
    evaluate_password_strength,
    validate_aadhaar,
    validate_password_strength,
    validate_phone_number,
)


def _empty_fields() -> Dict[str, str]:
    return {name: "" for name in constants.FORM_FIELDS}


@dataclass(frozen=True)
class FormModel:
    state: FormState = FormState.EDITING
    fields: Dict[str, str] = field(default_factory=_empty_fields)
    confirm_password: str = ""
    otp: str = ""
    session_id: Optional[str] = None
    resend_timer: float = 0
    resend_count: int = 0
    message: str = ""
    password_strength: str = ""
    cooldown: int = settings.OTP_RESEND_COOLDOWN_SECONDS
    max_sends: int = settings.OTP_MAX_SENDS

    @property
    def otp_verified(self) -> bool:
        return self.state in (FormState.OTP_VERIFIED, FormState.SUBMITTING, FormState.DONE)

    def value(self, name: str) -> str:
        return self.fields.get(name, "")


# ============================================================
# EVENTS
# ============================================================

@dataclass(frozen=True)
class FieldChanged:
    name: str
    value: str


@dataclass(frozen=True)
class ConfirmPasswordChanged:
    value: str


@dataclass(frozen=True)
class OtpChanged:
    value: str


@dataclass(frozen=True)
class Rejected:
    message: str


@dataclass(frozen=True)
class OtpSent:
    session_id: str
    message: str = constants.PROMPT_OTP_SENT


@dataclass(frozen=True)
class OtpVerified:
    verified: bool


@dataclass(frozen=True)
class Tick:
    elapsed: float


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    message: str = constants.REGISTRATION_SUCCESS


@dataclass(frozen=True)
class SubmitFailed:
    message: str


FormEvent = Union[
    FieldChanged, ConfirmPasswordChanged, OtpChanged, Rejected, OtpSent,
    OtpVerified, Tick, SubmitStarted, SubmitSucceeded, SubmitFailed,
]


# ============================================================
# REDUCER
# ============================================================

def _transition(model: FormModel, to_state: FormState, **changes) -> FormModel:
    if not is_valid_transition(model.state, to_state):
        raise ValueError(f"Invalid form transition: {model.state.value} -> {to_state.value}")
    return replace(model, state=to_state, **changes)


def _field_changed(model: FormModel, event: FieldChanged) -> FormModel:
    if event.name not in model.fields:
        raise ValueError(f"Unknown form field: {event.name}")

    value = event.value
    if event.name == "aadharCard":
        value = digits_only(value, AADHAR_LENGTH)
    elif event.name == "phoneNumber":
        value = digits_only(value, PHONE_LENGTH)

    fields = dict(model.fields)
    fields[event.name] = value
    changes = {"fields": fields}

    if event.name == "newPassword":
        changes["password_strength"] = evaluate_password_strength(value)

    # A verification only vouches for the number it was sent to
    if (
        event.name == "phoneNumber"
        and value != model.value("phoneNumber")
        and model.state in (FormState.OTP_SENT, FormState.OTP_VERIFIED)
    ):
        return _transition(model, FormState.EDITING, session_id=None, otp="", **changes)

    return replace(model, **changes)


def reduce(model: FormModel, event: FormEvent) -> FormModel:
    """
    Applies one event to the form.

    Args:
        model: Current form
        event: What happened

    Returns:
        The new form; `model` is left untouched

    Raises:
        ValueError: The event is not allowed in the current state
        TypeError: Unknown event type
    """
    if isinstance(event, FieldChanged):
        return _field_changed(model, event)

    if isinstance(event, ConfirmPasswordChanged):
        return replace(model, confirm_password=event.value)

    if isinstance(event, OtpChanged):
        return replace(model, otp=event.value)

    if isinstance(event, Rejected):
        return replace(model, message=event.message)

    if isinstance(event, OtpSent):
        return _transition(
            model,
            FormState.OTP_SENT,
            session_id=event.session_id,
            otp="",
            resend_count=model.resend_count + 1,
            resend_timer=model.cooldown,
            message=event.message,
        )

    if isinstance(event, OtpVerified):
        if not event.verified:
            return replace(model, message=constants.PROMPT_OTP_INVALID)
        return _transition(model, FormState.OTP_VERIFIED, message=constants.PROMPT_PHONE_VERIFIED)

    if isinstance(event, Tick):
        return replace(model, resend_timer=max(0, model.resend_timer - event.elapsed))

    if isinstance(event, SubmitStarted):
        return _transition(model, FormState.SUBMITTING, message="")

    if isinstance(event, SubmitSucceeded):
        return _transition(
            model,
            FormState.DONE,
            fields=_empty_fields(),
            confirm_password="",
            otp="",
            session_id=None,
            password_strength="",
            message=event.message,
        )

    if isinstance(event, SubmitFailed):
        return _transition(model, FormState.OTP_VERIFIED, message=event.message)

    raise TypeError(f"Unknown form event: {event!r}")


# ============================================================
# GUARDS
# ============================================================

def send_otp_blocker(model: FormModel) -> Optional[str]:
    """
    Returns why an OTP may not be sent right now, or None if it may.

    The send limit is permanent for this form even after the cooldown ends.
    """
    if model.state in (FormState.SUBMITTING, FormState.DONE):
        return constants.PROMPT_FORM_LOCKED

    phone = model.value("phoneNumber")
    if not phone:
        return constants.PROMPT_ENTER_PHONE
    if not validate_phone_number(phone):
        return constants.PROMPT_PHONE_FORMAT

    if model.resend_count >= model.max_sends:
        return constants.PROMPT_MAX_RESENDS.format(max_sends=model.max_sends)

    if model.resend_timer > 0:
        return constants.PROMPT_RESEND_WAIT.format(seconds=math.ceil(model.resend_timer))

    return None


def can_send_otp(model: FormModel) -> bool:
    return send_otp_blocker(model) is None


def send_button_label(model: FormModel) -> str:
    if model.resend_timer > 0:
        return f"Resend in {math.ceil(model.resend_timer)}s"
    if model.state == FormState.OTP_SENT:
        return "Resend OTP"
    return "Send OTP"


def verify_otp_blocker(model: FormModel) -> Optional[str]:
    if model.state == FormState.OTP_VERIFIED:
        return constants.PROMPT_PHONE_VERIFIED
    if model.state != FormState.OTP_SENT or not model.session_id:
        return constants.PROMPT_REQUEST_OTP_FIRST
    if not model.otp.strip():
        return constants.PROMPT_ENTER_OTP
    return None


def submission_blocker(model: FormModel) -> Optional[str]:
    """
    Returns why the form may not be submitted, or None if it may.

    Checks run in a fixed order and the first failure wins.
    """
    if model.state in (FormState.SUBMITTING, FormState.DONE):
        return constants.PROMPT_FORM_LOCKED
    if model.state != FormState.OTP_VERIFIED:
        return constants.PROMPT_VERIFY_PHONE_FIRST

    if any(not model.value(name).strip() for name in constants.FORM_FIELDS):
        return constants.PROMPT_FILL_ALL_FIELDS

    if model.confirm_password != model.value("newPassword"):
        return constants.PROMPT_PASSWORD_MISMATCH

    if not validate_aadhaar(model.value("aadharCard")):
        return constants.PROMPT_AADHAR_FORMAT

    if not validate_phone_number(model.value("phoneNumber")):
        return constants.PROMPT_PHONE_FORMAT

    if not validate_password_strength(model.value("newPassword")):
        return constants.PROMPT_WEAK_PASSWORD

    return None
