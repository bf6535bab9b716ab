"""Periodic maintenance jobs."""

from .notify_users import notify_overdue_borrowers
from .remove_unverified_accounts import remove_unverified_accounts
from .scheduler import init_scheduler

__all__ = ["notify_overdue_borrowers", "remove_unverified_accounts", "init_scheduler"]
