"""
app/flow/states.py

Purpose: Defines the registration form states

- Enum for each step (EDITING, OTP_SENT, OTP_VERIFIED, SUBMITTING, DONE)
- Single source of truth for form stages
- State transition validation
"""

from enum import Enum
from typing import Dict, List


class FormState(str, Enum):
    """
    Stages of the registration form. Fields stay editable in every state
    before DONE; the state tracks how far phone verification has got.
    """

    EDITING = "editing"
    OTP_SENT = "otp_sent"
    OTP_VERIFIED = "otp_verified"
    SUBMITTING = "submitting"
    DONE = "done"


# Valid state transitions - prevents submitting before verification
STATE_TRANSITIONS: Dict[FormState, List[FormState]] = {
    FormState.EDITING: [
        FormState.OTP_SENT,
    ],
    FormState.OTP_SENT: [
        FormState.OTP_SENT,  # Resend
        FormState.OTP_VERIFIED,
        FormState.EDITING,  # Phone number changed
    ],
    FormState.OTP_VERIFIED: [
        FormState.SUBMITTING,
        FormState.OTP_SENT,  # Resend resets verification
        FormState.EDITING,  # Phone number changed
    ],
    FormState.SUBMITTING: [
        FormState.DONE,
        FormState.OTP_VERIFIED,  # Backend rejected the registration
    ],
    FormState.DONE: [],
}


def is_valid_transition(from_state: FormState, to_state: FormState) -> bool:
    """
    Checks if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is allowed, False otherwise
    """
    return to_state in STATE_TRANSITIONS.get(from_state, [])
