"""Message bodies for the emails the library sends."""

from __future__ import annotations

LIBRARY_NAME = "Book Library Management System"


def verification_otp_email(code: int, minutes: int) -> tuple[str, str]:
    """Return ``(text, html)`` bodies carrying a verification code."""

    text = (
        f"Your {LIBRARY_NAME} verification code is {code}.\n\n"
        f"The code expires in {minutes} minutes. If you did not request it, "
        "you can ignore this email."
    )
    html = f"""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="text-align: center;">Verify Your Email Address</h2>
  <p>Your verification code is:</p>
  <p style="font-size: 24px; font-weight: bold; letter-spacing: 4px;">{code}</p>
  <p>This code expires in {minutes} minutes.</p>
  <p style="color: #888;">If you did not request this email, please ignore it.</p>
  <p>{LIBRARY_NAME} Team</p>
</div>
"""
    return text, html


def forgot_password_email(reset_url: str, minutes: int) -> tuple[str, str]:
    text = (
        f"A password reset was requested for your {LIBRARY_NAME} account.\n\n"
        f"Open the following link to choose a new password: {reset_url}\n\n"
        f"The link expires in {minutes} minutes."
    )
    html = f"""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="text-align: center;">Reset Your Password</h2>
  <p>Click the button below to choose a new password.</p>
  <p style="text-align: center;">
    <a href="{reset_url}" style="padding: 12px 20px; background: #000; color: #fff;">
      Reset Password
    </a>
  </p>
  <p>If the button does not work, copy this link: {reset_url}</p>
  <p>The link expires in {minutes} minutes.</p>
  <p>{LIBRARY_NAME} Team</p>
</div>
"""
    return text, html


def overdue_reminder_email(name: str, book_title: str | None) -> str:
    book = f'"{book_title}"' if book_title else "the book"
    return (
        f"Hello {name},\n\n"
        f"This is a gentle reminder that {book} you borrowed is overdue. "
        "Please return it to the library.\n\n"
        "Thank you"
    )
