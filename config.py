"""Application configuration module."""

import os
from datetime import timedelta
from pathlib import Path


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "y"}


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///library.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", str(Path("workspace") / "uploads"))
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(5 * 1024 * 1024)))
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # JWT sessions
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.getenv("JWT_EXPIRE_DAYS", "3")))
    JWT_ACCESS_COOKIE_NAME = "token"
    JWT_COOKIE_SECURE = _env_bool("JWT_COOKIE_SECURE", "false")
    JWT_COOKIE_CSRF_PROTECT = _env_bool("JWT_COOKIE_CSRF_PROTECT", "true")

    # CORS
    _raw_origins = os.getenv("ORIGINS", FRONTEND_URL)
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "120 per minute")
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")

    # Mail
    MAIL_SERVER = os.getenv("SMTP_HOST", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("SMTP_PORT", "587"))
    MAIL_USE_TLS = _env_bool("SMTP_USE_TLS", "true")
    MAIL_USERNAME = os.getenv("SMTP_MAIL")
    MAIL_PASSWORD = os.getenv("SMTP_PASSWORD")
    MAIL_DEFAULT_SENDER = os.getenv("SMTP_MAIL", "noreply@library.local")

    # Scheduled maintenance
    SCHEDULER_ENABLED = _env_bool("SCHEDULER_ENABLED", "true")
    NOTIFY_INTERVAL_MINUTES = int(os.getenv("NOTIFY_INTERVAL_MINUTES", "30"))
    PURGE_INTERVAL_MINUTES = int(os.getenv("PURGE_INTERVAL_MINUTES", "5"))
    OVERDUE_NOTICE_GRACE_HOURS = int(os.getenv("OVERDUE_NOTICE_GRACE_HOURS", "24"))
    UNVERIFIED_ACCOUNT_TTL_MINUTES = int(os.getenv("UNVERIFIED_ACCOUNT_TTL_MINUTES", "30"))

    # Library rules
    OTP_EXPIRE_MINUTES = int(os.getenv("OTP_EXPIRE_MINUTES", "15"))
    RESET_TOKEN_EXPIRE_MINUTES = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "15"))
    MAX_REGISTRATION_ATTEMPTS = int(os.getenv("MAX_REGISTRATION_ATTEMPTS", "5"))
    BORROW_PERIOD_DAYS = int(os.getenv("BORROW_PERIOD_DAYS", "7"))
    FINE_PER_HOUR = os.getenv("FINE_PER_HOUR", "0.10")
