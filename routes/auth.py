"""Authentication blueprint: registration, OTP verification, sessions and passwords."""

from __future__ import annotations

from datetime import datetime, timedelta
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required, unset_jwt_cookies
from werkzeug.exceptions import BadGateway, BadRequest, Conflict, NotFound, Unauthorized

from models import db
from models.user import User, hash_reset_token
from utils.auth import issue_session, require_user
from utils.email_templates import (
    LIBRARY_NAME,
    forgot_password_email,
    verification_otp_email,
)
from utils.mailer import MailDeliveryError, send_email
from utils.request_validation import (
    normalize_email,
    parse_json_request,
    validate_password_length,
)

auth_bp = Blueprint("auth", __name__)


def _minutes(config_key: str) -> int:
    return int(current_app.config[config_key])


def _parse_otp(raw: object) -> int:
    try:
        return int(str(raw).strip())
    except ValueError:
        raise BadRequest("Invalid OTP.") from None


@auth_bp.route("/register", methods=["POST"])
def register():
    """Create an unverified account and email it a verification code."""

    payload = parse_json_request(
        request,
        required_keys=("name", "email", "password"),
        message="Please enter all fields.",
    )
    name = str(payload["name"]).strip()
    email = normalize_email(payload["email"])
    password = str(payload["password"])

    if not email:
        raise BadRequest("Please enter all fields.")

    if User.query.filter_by(email=email, account_verified=True).first() is not None:
        raise Conflict("User already exists.")

    attempts = User.query.filter_by(email=email, account_verified=False).count()
    if attempts >= current_app.config["MAX_REGISTRATION_ATTEMPTS"]:
        raise BadRequest(
            "You have exceeded the number of registration attempts. "
            "Please contact support."
        )

    validate_password_length(password)

    lifetime = _minutes("OTP_EXPIRE_MINUTES")
    user = User(name=name, email=email, role="user")
    user.set_password(password)
    code = user.generate_verification_code(lifetime=timedelta(minutes=lifetime))
    db.session.add(user)
    db.session.commit()

    text, html = verification_otp_email(code, lifetime)
    try:
        send_email(email, f"{LIBRARY_NAME} Verification Code", text, html=html)
    except MailDeliveryError:
        db.session.delete(user)
        db.session.commit()
        raise BadGateway("Verification code failed to send.")

    return (
        jsonify({"message": f"Verification code sent to {email}."}),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/verify-otp", methods=["POST"])
def verify_otp():
    """Verify the newest registration attempt for an email."""

    payload = parse_json_request(
        request,
        required_keys=("email", "otp"),
        message="Email or OTP is missing.",
    )
    email = normalize_email(payload["email"])

    attempts = (
        User.query.filter_by(email=email, account_verified=False)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )
    if not attempts:
        raise NotFound("User not found.")

    user, stale = attempts[0], attempts[1:]
    if stale:
        for entry in stale:
            db.session.delete(entry)
        db.session.commit()

    if user.verification_code != _parse_otp(payload["otp"]):
        raise BadRequest("Invalid OTP.")

    if user.verification_code_expired():
        raise BadRequest("OTP expired.")

    user.mark_verified()
    db.session.commit()
    current_app.logger.info("Account verified for %s", email)

    return issue_session(user, "Account verified.")


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate a verified user and start a session."""

    payload = parse_json_request(
        request,
        required_keys=("email", "password"),
        message="Email and password are required.",
    )
    email = normalize_email(payload["email"])
    password = str(payload["password"])

    user = User.query.filter_by(email=email, account_verified=True).first()
    if user is None or not user.check_password(password):
        raise Unauthorized("Invalid email or password.")

    return issue_session(user, "User logged in successfully.")


@auth_bp.route("/logout", methods=["GET"])
@jwt_required()
def logout():
    response = jsonify({"message": "Logged out successfully."})
    unset_jwt_cookies(response)
    return response


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    """Return the authenticated user."""

    user = require_user()
    return jsonify({"user": user.to_dict()})


@auth_bp.route("/password/forgot", methods=["POST"])
def forgot_password():
    """Email a single-use password reset link."""

    payload = parse_json_request(
        request, required_keys=("email",), message="Email is required."
    )
    email = normalize_email(payload["email"])

    user = User.query.filter_by(email=email, account_verified=True).first()
    if user is None:
        raise NotFound("User not found.")

    lifetime = _minutes("RESET_TOKEN_EXPIRE_MINUTES")
    token = user.get_reset_password_token(lifetime=timedelta(minutes=lifetime))
    db.session.commit()

    frontend_url = current_app.config["FRONTEND_URL"].rstrip("/")
    text, html = forgot_password_email(f"{frontend_url}/password/reset/{token}", lifetime)
    try:
        send_email(user.email, f"{LIBRARY_NAME} Password Recovery", text, html=html)
    except MailDeliveryError as exc:
        user.clear_reset_password_token()
        db.session.commit()
        raise BadGateway(f"Password recovery email failed to send: {exc}")

    return jsonify({"message": f"Email sent to {user.email} successfully."})


@auth_bp.route("/password/reset/<token>", methods=["PUT"])
def reset_password(token: str):
    """Consume a reset token and set a new password."""

    user = User.query.filter(
        User.reset_password_token == hash_reset_token(token),
        User.reset_password_expire > datetime.utcnow(),
    ).first()
    if user is None:
        raise BadRequest("Reset password token is invalid or has expired.")

    payload = parse_json_request(
        request,
        required_keys=("password", "confirm_password"),
        message="Please fill all fields.",
    )
    password = str(payload["password"])
    confirm_password = str(payload["confirm_password"])

    if password != confirm_password:
        raise BadRequest("Password and confirm password do not match.")
    validate_password_length(password, confirm_password)

    user.set_password(password)
    user.clear_reset_password_token()
    db.session.commit()

    return issue_session(user, "Password reset successfully.")


@auth_bp.route("/password/update", methods=["PUT"])
@jwt_required()
def update_password():
    """Change the password of the signed-in user."""

    user = require_user()
    payload = parse_json_request(
        request,
        required_keys=("current_password", "new_password", "confirm_new_password"),
        message="Please fill all fields.",
    )
    new_password = str(payload["new_password"])
    confirm_new_password = str(payload["confirm_new_password"])

    if not user.check_password(str(payload["current_password"])):
        raise BadRequest("Current password is incorrect.")

    validate_password_length(new_password, confirm_new_password)

    if new_password != confirm_new_password:
        raise BadRequest("New password and confirm new password do not match.")

    user.set_password(new_password)
    db.session.commit()

    return jsonify({"message": "Password updated successfully."})
