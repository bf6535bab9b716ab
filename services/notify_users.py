"""Overdue loan reminders."""

from __future__ import annotations

from datetime import datetime, timedelta

from flask import current_app

from models import db
from models.borrow import Borrow
from utils.email_templates import overdue_reminder_email
from utils.mailer import MailDeliveryError, send_email


def notify_overdue_borrowers(now: datetime | None = None) -> int:
    """Email every borrower whose loan is overdue and not yet reminded.

    Each record is flagged ``notified`` as soon as its reminder is sent so it
    is never reminded twice. A failed send leaves the record for the next
    run. Returns the number of reminders sent.
    """

    now = now or datetime.utcnow()
    cutoff = now - timedelta(hours=current_app.config["OVERDUE_NOTICE_GRACE_HOURS"])

    overdue = Borrow.overdue_filter(Borrow.query, cutoff).order_by(Borrow.due_date).all()

    sent = 0
    for borrow in overdue:
        user = borrow.user
        if user is None or not user.email:
            continue
        title = borrow.book.title if borrow.book else None
        try:
            send_email(
                user.email,
                "Book return reminder",
                overdue_reminder_email(user.name, title),
            )
        except MailDeliveryError:
            continue
        borrow.notified = True
        db.session.commit()
        sent += 1

    current_app.logger.info("Overdue reminders sent: %d of %d", sent, len(overdue))
    return sent
