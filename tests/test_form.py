import pytest

from app.flow.form import (
    ConfirmPasswordChanged,
    FieldChanged,
    FormModel,
    OtpChanged,
    OtpSent,
    OtpVerified,
    Rejected,
    SubmitFailed,
    SubmitStarted,
    SubmitSucceeded,
    Tick,
    can_send_otp,
    reduce,
    send_button_label,
    send_otp_blocker,
    submission_blocker,
    verify_otp_blocker,
)
from app.flow.states import FormState
from utils import constants

VALID_FIELDS = {
    "officialEmail": "a@x.com",
    "aadharCard": "123456789012",
    "name": "A",
    "course": "CS",
    "phoneNumber": "9876543210",
    "newPassword": "Abc123!@",
}


def apply(model, *events):
    for event in events:
        model = reduce(model, event)
    return model


def filled_form(**overrides):
    values = {**VALID_FIELDS, **overrides}
    model = apply(FormModel(), *[FieldChanged(name, value) for name, value in values.items()])
    return reduce(model, ConfirmPasswordChanged(values["newPassword"]))


def verified_form(**overrides):
    return apply(filled_form(**overrides), OtpSent("sess-1"), OtpVerified(True))


def test_initial_state():
    model = FormModel()

    assert model.state == FormState.EDITING
    assert model.resend_count == 0
    assert model.resend_timer == 0
    assert model.cooldown == 30
    assert model.max_sends == 3
    assert set(model.fields) == set(VALID_FIELDS)


def test_aadhaar_and_phone_keep_digits_only():
    model = apply(
        FormModel(),
        FieldChanged("aadharCard", "1234-5678-9012-345"),
        FieldChanged("phoneNumber", "+91 98765 43210"),
    )

    assert model.value("aadharCard") == "123456789012"
    assert model.value("phoneNumber") == "9198765432"


def test_other_fields_kept_verbatim():
    model = reduce(FormModel(), FieldChanged("name", "  Asha K.  "))
    assert model.value("name") == "  Asha K.  "


def test_unknown_field_rejected():
    with pytest.raises(ValueError):
        reduce(FormModel(), FieldChanged("nickname", "x"))


def test_password_strength_rating():
    assert reduce(FormModel(), FieldChanged("newPassword", "abc")).password_strength == "weak"
    assert reduce(FormModel(), FieldChanged("newPassword", "Abc123")).password_strength == "medium"
    assert reduce(FormModel(), FieldChanged("newPassword", "Abc123!@")).password_strength == "strong"
    assert reduce(FormModel(), FieldChanged("newPassword", "")).password_strength == ""


def test_reduce_does_not_mutate():
    model = FormModel()
    updated = reduce(model, FieldChanged("name", "A"))

    assert model.value("name") == ""
    assert updated.value("name") == "A"


def test_send_requires_valid_phone():
    assert send_otp_blocker(FormModel()) == constants.PROMPT_ENTER_PHONE
    short = reduce(FormModel(), FieldChanged("phoneNumber", "98765"))
    assert send_otp_blocker(short) == constants.PROMPT_PHONE_FORMAT
    assert can_send_otp(filled_form())


def test_otp_sent_starts_cooldown():
    model = reduce(filled_form(), OtpSent("sess-1"))

    assert model.state == FormState.OTP_SENT
    assert model.session_id == "sess-1"
    assert model.resend_count == 1
    assert model.resend_timer == 30
    assert model.otp == ""


def test_resend_blocked_during_cooldown():
    model = reduce(filled_form(), OtpSent("sess-1"))

    assert send_otp_blocker(model) == constants.PROMPT_RESEND_WAIT.format(seconds=30)
    assert send_button_label(model) == "Resend in 30s"

    model = reduce(model, Tick(29.5))
    assert not can_send_otp(model)

    model = reduce(model, Tick(0.5))
    assert model.resend_timer == 0
    assert can_send_otp(model)
    assert send_button_label(model) == "Resend OTP"


def test_tick_never_goes_negative():
    model = apply(filled_form(), OtpSent("sess-1"), Tick(100))
    assert model.resend_timer == 0


def test_resend_blocked_forever_after_max_sends():
    model = filled_form()
    for n in range(3):
        assert can_send_otp(model)
        model = apply(model, OtpSent(f"sess-{n}"), Tick(30))

    assert model.resend_count == 3
    assert model.resend_timer == 0
    model = reduce(model, Tick(10_000))
    assert send_otp_blocker(model) == constants.PROMPT_MAX_RESENDS.format(max_sends=3)


def test_verify_needs_sent_otp_and_code():
    assert verify_otp_blocker(filled_form()) == constants.PROMPT_REQUEST_OTP_FIRST

    sent = reduce(filled_form(), OtpSent("sess-1"))
    assert verify_otp_blocker(sent) == constants.PROMPT_ENTER_OTP

    typed = reduce(sent, OtpChanged("123456"))
    assert verify_otp_blocker(typed) is None


def test_wrong_code_stays_in_otp_sent():
    model = apply(filled_form(), OtpSent("sess-1"), OtpVerified(False))

    assert model.state == FormState.OTP_SENT
    assert model.message == constants.PROMPT_OTP_INVALID


def test_correct_code_verifies():
    model = verified_form()

    assert model.state == FormState.OTP_VERIFIED
    assert model.otp_verified
    assert model.message == constants.PROMPT_PHONE_VERIFIED


def test_verify_without_send_is_invalid_transition():
    with pytest.raises(ValueError):
        reduce(filled_form(), OtpVerified(True))


def test_changing_phone_drops_verification():
    model = reduce(verified_form(), FieldChanged("phoneNumber", "9123456789"))

    assert model.state == FormState.EDITING
    assert model.session_id is None
    assert model.resend_count == 1


def test_retyping_same_phone_keeps_verification():
    model = reduce(verified_form(), FieldChanged("phoneNumber", "9876543210"))
    assert model.state == FormState.OTP_VERIFIED


def test_resend_after_verification_requires_new_verification():
    model = apply(verified_form(), Tick(30), OtpSent("sess-2"))

    assert model.state == FormState.OTP_SENT
    assert submission_blocker(model) == constants.PROMPT_VERIFY_PHONE_FIRST


def test_submission_allowed_when_everything_checks_out():
    assert submission_blocker(verified_form()) is None


def test_submission_requires_verified_otp():
    assert submission_blocker(filled_form()) == constants.PROMPT_VERIFY_PHONE_FIRST
    sent = reduce(filled_form(), OtpSent("sess-1"))
    assert submission_blocker(sent) == constants.PROMPT_VERIFY_PHONE_FIRST


def test_submission_requires_all_fields():
    assert submission_blocker(verified_form(course="")) == constants.PROMPT_FILL_ALL_FIELDS


def test_submission_requires_matching_confirmation():
    model = reduce(verified_form(), ConfirmPasswordChanged("Abc123!#"))
    assert submission_blocker(model) == constants.PROMPT_PASSWORD_MISMATCH


def test_submission_requires_twelve_digit_aadhaar():
    assert submission_blocker(verified_form(aadharCard="12345678901")) == constants.PROMPT_AADHAR_FORMAT


def test_submission_requires_ten_digit_phone():
    assert submission_blocker(verified_form(phoneNumber="98765")) == constants.PROMPT_PHONE_FORMAT


def test_submission_requires_strong_password():
    for weak in ["abc123!@", "Abcdefg!", "Abcdefg1", "Ab1!", "Abc123!@ "]:
        assert submission_blocker(verified_form(newPassword=weak)) == constants.PROMPT_WEAK_PASSWORD


def test_submission_rejection_keeps_state_and_input():
    model = reduce(verified_form(), ConfirmPasswordChanged("nope"))
    model = reduce(model, Rejected(submission_blocker(model)))

    assert model.state == FormState.OTP_VERIFIED
    assert model.value("newPassword") == "Abc123!@"
    assert model.message == constants.PROMPT_PASSWORD_MISMATCH


def test_submit_lifecycle_success():
    model = reduce(verified_form(), SubmitStarted())
    assert model.state == FormState.SUBMITTING
    assert submission_blocker(model) == constants.PROMPT_FORM_LOCKED
    assert send_otp_blocker(model) == constants.PROMPT_FORM_LOCKED

    done = reduce(model, SubmitSucceeded())
    assert done.state == FormState.DONE
    assert done.message == constants.REGISTRATION_SUCCESS
    assert all(value == "" for value in done.fields.values())
    assert done.confirm_password == ""
    assert done.session_id is None


def test_submit_failure_returns_to_verified():
    model = apply(verified_form(), SubmitStarted(), SubmitFailed("Aadhaar card already registered"))

    assert model.state == FormState.OTP_VERIFIED
    assert model.message == "Aadhaar card already registered"
    assert model.value("aadharCard") == "123456789012"


def test_submit_before_verification_is_invalid_transition():
    with pytest.raises(ValueError):
        reduce(filled_form(), SubmitStarted())


def test_unknown_event():
    with pytest.raises(TypeError):
        reduce(FormModel(), object())
