"""Purge of abandoned registrations."""

from __future__ import annotations

from datetime import datetime, timedelta

from flask import current_app

from models import db
from models.user import User


def remove_unverified_accounts(now: datetime | None = None) -> int:
    """Delete unverified users created more than the configured TTL ago."""

    now = now or datetime.utcnow()
    cutoff = now - timedelta(minutes=current_app.config["UNVERIFIED_ACCOUNT_TTL_MINUTES"])

    removed = User.query.filter(
        User.account_verified.is_(False),
        User.created_at < cutoff,
    ).delete(synchronize_session=False)
    db.session.commit()

    if removed:
        current_app.logger.info("Removed %d unverified accounts", removed)
    return removed
