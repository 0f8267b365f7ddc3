"""
Interactive registration walkthrough

Drives the registration form against a running backend, step by step:
details -> send OTP -> verify OTP -> submit -> login.

    python scripts/register_flow.py [backend_url]
"""

import asyncio
import getpass
import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.flow.api_client import RegistrationApiClient
from app.flow.controller import FormController, login
from app.flow.form import send_button_label
from app.flow.states import FormState


def print_section(title):
    print("\n" + "=" * 80)
    print(f"  {title}")
    print("=" * 80)


def show(controller: FormController):
    model = controller.model
    if model.message:
        print(f"\n>> {model.message}")
    print(f"   [state={model.state.value}, sends={model.resend_count}/{model.max_sends}]")


async def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else None
    client = RegistrationApiClient(base_url=base_url)
    controller = FormController(client)

    print(f"\nVoter registration walkthrough against {client.base_url}")

    # ============================================================================
    # STEP 1: Details
    # ============================================================================
    print_section("STEP 1: Enter your details")

    controller.change_field("officialEmail", input("Official email: ").strip())
    controller.change_field("aadharCard", input("Aadhaar card number (12 digits): "))
    controller.change_field("name", input("Full name: ").strip())
    controller.change_field("course", input("Course: ").strip())
    controller.change_field("phoneNumber", input("Phone number (10 digits): "))

    # ============================================================================
    # STEP 2: Phone verification
    # ============================================================================
    print_section("STEP 2: Verify your phone number")

    last_tick = time.monotonic()
    while controller.model.state != FormState.OTP_VERIFIED:
        now = time.monotonic()
        controller.tick(now - last_tick)
        last_tick = now

        choice = input(
            f"\n[1] {send_button_label(controller.model)}  [2] Enter OTP  [3] Change phone  [q] Quit: "
        ).strip().lower()

        if choice == "1":
            await controller.send_otp()
        elif choice == "2":
            controller.change_otp(input("OTP: ").strip())
            await controller.verify_otp()
        elif choice == "3":
            controller.change_field("phoneNumber", input("Phone number (10 digits): "))
        elif choice == "q":
            print("\nRegistration abandoned.")
            return
        show(controller)

    # ============================================================================
    # STEP 3: Password and submit
    # ============================================================================
    print_section("STEP 3: Choose a password")

    while controller.model.state != FormState.DONE:
        controller.change_field("newPassword", getpass.getpass("New password: "))
        print(f"   Password strength: {controller.model.password_strength or '-'}")
        controller.change_confirm_password(getpass.getpass("Confirm password: "))

        await controller.submit()
        show(controller)

        if controller.model.state != FormState.DONE:
            if input("\nTry again? (yes/no): ").strip().lower() not in ["yes", "y"]:
                return

    # ============================================================================
    # STEP 4: Login
    # ============================================================================
    print_section("STEP 4: Log in")

    email = input("Official email: ").strip()
    user, message = await login(client, email, getpass.getpass("Password: "))
    print(f"\n>> {message}")
    if user:
        for key, value in user.items():
            print(f"   {key}: {value}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
