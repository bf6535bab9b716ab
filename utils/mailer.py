"""Outgoing email through Flask-Mail."""

from __future__ import annotations

import smtplib

from flask import current_app
from flask_mail import Mail, Message

mail = Mail()


class MailDeliveryError(RuntimeError):
    """Raised when the SMTP server rejects or cannot receive a message."""


def send_email(recipient: str, subject: str, body: str, html: str | None = None) -> None:
    """Send a single message, raising :class:`MailDeliveryError` on failure."""

    message = Message(subject=subject, recipients=[recipient], body=body, html=html)
    try:
        mail.send(message)
    except (smtplib.SMTPException, OSError) as exc:
        current_app.logger.exception(
            "Failed to send email to %s (subject=%s)", recipient, subject
        )
        raise MailDeliveryError(str(exc)) from exc

    current_app.logger.info("Email sent to %s subject=%s", recipient, subject)
