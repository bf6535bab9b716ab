"""Seed the first library administrator."""

import os

from app import create_app
from models import db
from models.user import User

ADMIN_NAME = os.getenv("ADMIN_NAME", "Library Admin")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com").strip().lower()
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def main() -> None:
    app = create_app()
    with app.app_context():
        admin = User.query.filter_by(email=ADMIN_EMAIL, account_verified=True).first()
        if admin is None:
            admin = User(
                name=ADMIN_NAME,
                email=ADMIN_EMAIL,
                role="admin",
                account_verified=True,
            )
            admin.set_password(ADMIN_PASSWORD)
            db.session.add(admin)
            action = "created"
        else:
            admin.role = "admin"
            admin.set_password(ADMIN_PASSWORD)
            action = "updated"
        db.session.commit()
        print(f"Admin user {action}: {ADMIN_EMAIL}")

        scheduler = app.extensions.get("scheduler")
        if scheduler is not None:
            scheduler.shutdown(wait=False)


if __name__ == "__main__":
    main()
