"""Session helpers: current-user lookup, role gates and token issuing."""

from __future__ import annotations

from functools import wraps
from http import HTTPStatus

from flask import jsonify
from flask_jwt_extended import (
    create_access_token,
    get_jwt_identity,
    jwt_required,
    set_access_cookies,
)
from werkzeug.exceptions import Forbidden, Unauthorized

from models import db
from models.user import User


def get_current_user() -> User | None:
    try:
        identity = get_jwt_identity()
    except RuntimeError:
        return None
    if identity is None:
        return None
    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        return None
    return db.session.get(User, user_id)


def require_user() -> User:
    """Return the authenticated account or raise 401."""

    user = get_current_user()
    if user is None or not user.account_verified:
        raise Unauthorized("User is not authenticated.")
    return user


def require_role(*roles: str) -> User:
    user = require_user()
    if user.role not in roles:
        raise Forbidden(
            f"User with this role ({user.role}) is not allowed to access this resource."
        )
    return user


def roles_required(*roles: str):
    """Require a valid token whose user holds one of ``roles``."""

    def decorator(view):
        @wraps(view)
        @jwt_required()
        def wrapper(*args, **kwargs):
            require_role(*roles)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def issue_session(user: User, message: str, status: int = HTTPStatus.OK):
    """Build a response carrying a fresh access token in body and cookie."""

    token = create_access_token(identity=str(user.id))
    response = jsonify({"message": message, "access_token": token, "user": user.to_dict()})
    response.status_code = status
    set_access_cookies(response, token)
    return response
