"""User model definition."""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from . import db


USER_ROLES = ("user", "admin")

DEFAULT_OTP_LIFETIME = timedelta(minutes=15)
DEFAULT_RESET_TOKEN_LIFETIME = timedelta(minutes=15)


def hash_reset_token(token: str) -> str:
    """Return the digest stored for a password reset token."""

    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class User(db.Model):
    """Represents a library member or administrator."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    # Unverified registration attempts may share an email; uniqueness among
    # verified accounts is enforced by the registration flow.
    email = db.Column(db.String(255), nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(*USER_ROLES, name="user_role"),
        nullable=False,
        default="user",
        server_default=db.text("'user'"),
    )
    account_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verification_code = db.Column(db.Integer, nullable=True)
    verification_code_expire = db.Column(db.DateTime, nullable=True)
    reset_password_token = db.Column(db.String(64), nullable=True, index=True)
    reset_password_expire = db.Column(db.DateTime, nullable=True)
    avatar_path = db.Column(db.String(512), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    borrows = db.relationship(
        "Borrow",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return check_password_hash(self.password_hash, password)

    def generate_verification_code(
        self, lifetime: Optional[timedelta] = None, now: Optional[datetime] = None
    ) -> int:
        """Store a fresh five digit OTP and return it."""

        first_digit = secrets.randbelow(9) + 1
        remaining = secrets.randbelow(10_000)
        code = int(f"{first_digit}{remaining:04d}")

        now = now or datetime.utcnow()
        self.verification_code = code
        self.verification_code_expire = now + (lifetime or DEFAULT_OTP_LIFETIME)
        return code

    def verification_code_expired(self, now: Optional[datetime] = None) -> bool:
        if self.verification_code_expire is None:
            return True
        now = now or datetime.utcnow()
        return now > self.verification_code_expire

    def mark_verified(self) -> None:
        """Mark the account verified and clear the pending OTP."""

        self.account_verified = True
        self.verification_code = None
        self.verification_code_expire = None

    def get_reset_password_token(
        self, lifetime: Optional[timedelta] = None, now: Optional[datetime] = None
    ) -> str:
        """Generate a reset token, keeping only its hash on the record.

        The raw token is returned so it can be mailed to the user; lookups
        later hash the submitted token with :func:`hash_reset_token`.
        """

        token = secrets.token_hex(20)
        now = now or datetime.utcnow()
        self.reset_password_token = hash_reset_token(token)
        self.reset_password_expire = now + (lifetime or DEFAULT_RESET_TOKEN_LIFETIME)
        return token

    def clear_reset_password_token(self) -> None:
        self.reset_password_token = None
        self.reset_password_expire = None

    def to_dict(self) -> dict:
        """Serialize the user without any credential material."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "account_verified": self.account_verified,
            "has_avatar": bool(self.avatar_path),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email} role={self.role}>"
