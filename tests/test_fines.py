"""Tests for overdue fine calculation."""

from datetime import datetime, timedelta
from decimal import Decimal

from utils.fines import calculate_fine

DUE = datetime(2024, 3, 1, 9, 0, 0)


def test_no_fine_when_returned_on_time():
    assert calculate_fine(DUE, now=DUE - timedelta(days=1)) == Decimal("0.00")
    assert calculate_fine(DUE, now=DUE) == Decimal("0.00")


def test_partial_hours_are_not_charged():
    assert calculate_fine(DUE, now=DUE + timedelta(minutes=59)) == Decimal("0.00")
    assert calculate_fine(DUE, now=DUE + timedelta(hours=2, minutes=30)) == Decimal("0.20")


def test_fine_grows_per_full_hour():
    assert calculate_fine(DUE, now=DUE + timedelta(days=2)) == Decimal("4.80")


def test_custom_rate():
    assert calculate_fine(DUE, now=DUE + timedelta(hours=3), fine_per_hour="0.5") == Decimal("1.50")
