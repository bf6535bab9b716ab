"""Overdue fine calculation."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

DEFAULT_FINE_PER_HOUR = Decimal("0.10")
_CENTS = Decimal("0.01")


def calculate_fine(
    due_date: datetime,
    now: datetime | None = None,
    fine_per_hour: Decimal | str | None = None,
) -> Decimal:
    """Return the fine owed for a loan due at ``due_date``.

    Every full hour past the due date costs ``fine_per_hour``; partial hours
    are not charged.
    """

    now = now or datetime.utcnow()
    if now <= due_date:
        return Decimal("0.00")

    rate = Decimal(str(fine_per_hour)) if fine_per_hour is not None else DEFAULT_FINE_PER_HOUR
    late_hours = int((now - due_date).total_seconds() // 3600)
    return (rate * late_hours).quantize(_CENTS, rounding=ROUND_HALF_UP)
