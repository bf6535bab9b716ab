"""Tests for the User model helpers."""

from datetime import datetime, timedelta

from models import db
from models.user import User, hash_reset_token


def test_password_helpers(app):
    with app.app_context():
        user = User(name="Helper", email="helper@example.com")
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()

        assert user.role == "user"
        assert user.account_verified is False
        assert user.password_hash != "password123"
        assert user.check_password("password123") is True
        assert user.check_password("wrong-password") is False


def test_verification_code_is_five_digits_with_expiry():
    user = User(name="Otp", email="otp@example.com")
    now = datetime(2024, 1, 1, 12, 0, 0)

    code = user.generate_verification_code(lifetime=timedelta(minutes=15), now=now)

    assert 10000 <= code <= 99999
    assert user.verification_code == code
    assert user.verification_code_expire == now + timedelta(minutes=15)
    assert user.verification_code_expired(now=now + timedelta(minutes=14)) is False
    assert user.verification_code_expired(now=now + timedelta(minutes=16)) is True


def test_mark_verified_clears_code():
    user = User(name="Otp", email="otp@example.com")
    user.generate_verification_code()

    user.mark_verified()

    assert user.account_verified is True
    assert user.verification_code is None
    assert user.verification_code_expire is None
    assert user.verification_code_expired() is True


def test_reset_token_stores_only_hash():
    user = User(name="Reset", email="reset@example.com")
    now = datetime(2024, 1, 1, 12, 0, 0)

    token = user.get_reset_password_token(lifetime=timedelta(minutes=15), now=now)

    assert user.reset_password_token != token
    assert user.reset_password_token == hash_reset_token(token)
    assert user.reset_password_expire == now + timedelta(minutes=15)

    user.clear_reset_password_token()
    assert user.reset_password_token is None
    assert user.reset_password_expire is None


def test_to_dict_hides_credentials(app):
    with app.app_context():
        user = User(name="Secret", email="secret@example.com")
        user.set_password("password123")
        user.generate_verification_code()
        user.get_reset_password_token()
        db.session.add(user)
        db.session.commit()

        payload = user.to_dict()

    assert payload["email"] == "secret@example.com"
    for hidden in ("password_hash", "verification_code", "reset_password_token"):
        assert hidden not in payload
