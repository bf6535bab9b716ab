"""Background scheduler running the maintenance jobs."""

from __future__ import annotations

from apscheduler.schedulers.background import BackgroundScheduler
from flask import Flask

from models import db

from .notify_users import notify_overdue_borrowers
from .remove_unverified_accounts import remove_unverified_accounts


def _run_in_app_context(app: Flask, job, description: str):
    def runner():
        with app.app_context():
            try:
                job()
            except Exception:
                db.session.rollback()
                app.logger.exception("Some errors occurred while %s", description)
            finally:
                db.session.remove()

    return runner


def init_scheduler(app: Flask) -> BackgroundScheduler | None:
    """Start the interval jobs unless ``SCHEDULER_ENABLED`` is off."""

    if not app.config.get("SCHEDULER_ENABLED", True):
        return None

    scheduler = BackgroundScheduler(daemon=True)
    scheduler.add_job(
        _run_in_app_context(app, notify_overdue_borrowers, "notifying users"),
        "interval",
        minutes=app.config["NOTIFY_INTERVAL_MINUTES"],
        id="notify_overdue_borrowers",
        max_instances=1,
        coalesce=True,
    )
    scheduler.add_job(
        _run_in_app_context(app, remove_unverified_accounts, "removing unverified accounts"),
        "interval",
        minutes=app.config["PURGE_INTERVAL_MINUTES"],
        id="remove_unverified_accounts",
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    app.extensions["scheduler"] = scheduler
    app.logger.info("Maintenance scheduler started")
    return scheduler
