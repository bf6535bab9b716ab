"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 16


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _check_required(data, required_keys: Iterable[str] | None, message: str | None) -> None:
    if not required_keys:
        return
    missing = [key for key in required_keys if _is_blank(data.get(key))]
    if missing:
        raise BadRequest(
            message
            or "Missing required fields: {}.".format(", ".join(sorted(missing)))
        )


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
    message: str | None = None,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest(message or "Request JSON body must not be empty.")

    _check_required(data, required_keys, message)
    return data


def parse_form_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    message: str | None = None,
) -> dict:
    """Return multipart/urlencoded form fields as a plain dict."""

    data = {key: value.strip() for key, value in req.form.items()}
    _check_required(data, required_keys, message)
    return data


def validate_password_length(*passwords: str, message: str | None = None) -> None:
    """Reject any password outside the allowed length range."""

    for password in passwords:
        if not PASSWORD_MIN_LENGTH <= len(password or "") <= PASSWORD_MAX_LENGTH:
            raise BadRequest(
                message
                or f"Password must be between {PASSWORD_MIN_LENGTH} and "
                f"{PASSWORD_MAX_LENGTH} characters."
            )


def normalize_email(raw_email: object) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""

    if not isinstance(raw_email, str):
        return ""
    return raw_email.strip().lower()
