"""User management blueprint for administrators."""

from __future__ import annotations

import uuid
from http import HTTPStatus
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request, send_file
from flask_jwt_extended import jwt_required
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest, Conflict, NotFound

from models import db
from models.user import User
from storage.local_storage import LocalStorage
from utils.auth import require_user, roles_required
from utils.request_validation import (
    normalize_email,
    parse_form_request,
    validate_password_length,
)

users_bp = Blueprint("users", __name__)

AVATAR_FOLDER = "admin_avatars"
ALLOWED_AVATAR_TYPES = {"image/png", "image/jpeg", "image/webp"}


def _avatar_storage() -> LocalStorage:
    return LocalStorage(current_app.config.get("UPLOAD_DIR"), folder=AVATAR_FOLDER)


def _validate_avatar(file: FileStorage) -> None:
    if file.filename is None or file.filename.strip() == "":
        raise BadRequest("Admin avatar is required.")
    if file.mimetype not in ALLOWED_AVATAR_TYPES:
        raise BadRequest("File format not supported.")


def _build_avatar_filename(original: str) -> str:
    return f"{uuid.uuid4().hex}{Path(original).suffix.lower()}"


@users_bp.route("/all", methods=["GET"])
@roles_required("admin")
def list_users():
    """List every verified account."""

    users = (
        User.query.filter_by(account_verified=True)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )
    return jsonify({"users": [user.to_dict() for user in users], "count": len(users)})


@users_bp.route("/add/new-admin", methods=["POST"])
@roles_required("admin")
def register_new_admin():
    """Create a verified administrator with an avatar image."""

    avatar = request.files.get("avatar")
    if not isinstance(avatar, FileStorage):
        raise BadRequest("Admin avatar is required.")

    data = parse_form_request(
        request,
        required_keys=("name", "email", "password"),
        message="Please fill all fields.",
    )
    email = normalize_email(data["email"])

    if User.query.filter_by(email=email, account_verified=True).first() is not None:
        raise Conflict("User already registered.")

    validate_password_length(data["password"])
    _validate_avatar(avatar)

    storage = _avatar_storage()
    avatar_path = storage.save(avatar, _build_avatar_filename(avatar.filename or "avatar"))

    admin = User(
        name=data["name"],
        email=email,
        role="admin",
        account_verified=True,
        avatar_path=avatar_path,
    )
    admin.set_password(data["password"])
    db.session.add(admin)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        storage.delete(avatar_path)
        raise
    current_app.logger.info("Admin account created for %s", email)

    return (
        jsonify({"message": "Admin registered successfully.", "admin": admin.to_dict()}),
        HTTPStatus.CREATED,
    )


@users_bp.route("/avatar/<int:user_id>", methods=["GET"])
@jwt_required()
def download_avatar(user_id: int):
    """Stream a stored avatar image."""

    require_user()
    user = db.session.get(User, user_id)
    if user is None or not user.avatar_path:
        raise NotFound("Avatar not found.")

    storage = _avatar_storage()
    if not storage.exists(user.avatar_path):
        raise NotFound("Stored avatar could not be found.")

    return send_file(
        storage.open(user.avatar_path),
        download_name=Path(user.avatar_path).name,
    )
