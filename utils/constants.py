"""
utils/constants.py

Purpose: Centralized static content

- Backend response messages
- Registration form prompts
- Form limits

(Prevents hardcoding across the codebase)
"""

# ============================================================
# BACKEND RESPONSES
# ============================================================

REGISTRATION_SUCCESS = "Registration successful!"
MISSING_FIELDS = "Missing required fields"
AADHAR_ALREADY_REGISTERED = "Aadhaar card already registered"
PHONE_ALREADY_REGISTERED = "Phone number already registered"
INVALID_AADHAR = "Invalid Aadhaar number"
REGISTRATION_FAILED = "Server error during registration"

LOGIN_SUCCESS = "Login successful"
INVALID_CREDENTIALS = "Invalid email or password"
LOGIN_FAILED = "Error logging in"

ADMIN_NOT_FOUND = "Admin not found"
SERVER_ERROR = "Server error"

INVALID_PHONE = "Invalid phone number"
PHONE_AVAILABLE = "Phone number available"
PHONE_CHECK_FAILED = "Server error while checking phone"

OTP_SENT = "OTP sent successfully!"
OTP_SEND_FAILED = "Failed to send OTP"
OTP_SEND_ERROR = "Server error while sending OTP"
OTP_VERIFIED = "OTP verified successfully!"
OTP_INVALID = "Invalid or expired OTP"
OTP_VERIFY_ERROR = "Server error while verifying OTP"
OTP_FIELDS_MISSING = "Session ID or OTP missing"

# ============================================================
# REGISTRATION FORM PROMPTS
# ============================================================

PROMPT_ENTER_PHONE = "Please enter your phone number first."
PROMPT_PHONE_FORMAT = "Invalid phone number: must be exactly 10 digits."
PROMPT_AADHAR_FORMAT = "Invalid Aadhar number: must be exactly 12 digits."
PROMPT_MAX_RESENDS = (
    "You have reached the maximum of {max_sends} resend attempts. "
    "Try again later or contact support."
)
PROMPT_RESEND_WAIT = "Please wait {seconds}s before requesting another OTP."
PROMPT_OTP_SENT = "OTP sent. Please check your phone."
PROMPT_PHONE_TAKEN = "This phone number is already registered. Use a different number or login."
PROMPT_OTP_SEND_FAILED = "Failed to send OTP. Please try again."

PROMPT_REQUEST_OTP_FIRST = "Please request an OTP first."
PROMPT_ENTER_OTP = "Please enter the OTP received."
PROMPT_PHONE_VERIFIED = "Phone verified successfully!"
PROMPT_OTP_INVALID = "Invalid OTP. Please try again."
PROMPT_OTP_VERIFY_FAILED = "Failed to verify OTP. Please try again."

PROMPT_VERIFY_PHONE_FIRST = "Please verify your phone number before registering."
PROMPT_FILL_ALL_FIELDS = "Please fill in all required fields."
PROMPT_PASSWORD_MISMATCH = "Passwords do not match"
PROMPT_WEAK_PASSWORD = (
    "Password must be at least 8 characters long, contain one uppercase letter, "
    "one number, and one special character."
)
PROMPT_FORM_LOCKED = "Registration is already in progress or complete."

PROMPT_AADHAR_TAKEN = "This Aadhaar card is already registered. Please login instead."
PROMPT_PHONE_TAKEN_LOGIN = "This phone number is already registered. Please login instead."
PROMPT_EMAIL_TAKEN = "This email is already registered. Try logging in."
PROMPT_REGISTRATION_UNKNOWN = "An unknown error occurred during registration."
PROMPT_CONNECTION_ERROR = "Error connecting to server. Please try again."
PROMPT_LOGIN_FAILED = "Login failed. Please try again."

# ============================================================
# FORM LIMITS
# ============================================================

FORM_FIELDS = ("officialEmail", "aadharCard", "name", "course", "phoneNumber", "newPassword")
