"""Application factory."""

import json
import os
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from models import db
from routes.auth import auth_bp
from routes.books import books_bp
from routes.borrows import borrows_bp
from routes.users import users_bp
from services.scheduler import init_scheduler
from utils.mailer import mail

API_PREFIX = "/api/v1"

migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        methods=["GET", "POST", "PUT", "DELETE"],
        supports_credentials=True,
    )

    # Rate limiting
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    headers_enabled = app.config.get("RATELIMIT_HEADERS_ENABLED", True)
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())

    global limiter
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "120 per minute")],
        storage_uri=storage_uri,
        headers_enabled=headers_enabled,
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Ensure uploads directory exists
    upload_dir = app.config.get("UPLOAD_DIR")
    if upload_dir:
        os.makedirs(upload_dir, exist_ok=True)

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix=f"{API_PREFIX}/auth")
    app.register_blueprint(books_bp, url_prefix=f"{API_PREFIX}/book")
    app.register_blueprint(borrows_bp, url_prefix=f"{API_PREFIX}/borrow")
    app.register_blueprint(users_bp, url_prefix=f"{API_PREFIX}/user")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)
    _register_jwt_handlers()

    # Maintenance jobs
    init_scheduler(app)

    return app


def _error_response(status: int, error: str, detail: str):
    request_id = g.get("request_id") or str(uuid.uuid4())
    response = jsonify({"error": error, "detail": detail, "request_id": request_id})
    response.status_code = status
    response.headers.setdefault("X-Request-ID", request_id)
    return response


def _register_jwt_handlers() -> None:
    """Render token failures in the same JSON shape as other errors."""

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _error_response(401, "Unauthorized", "User is not authenticated.")

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _error_response(401, "Unauthorized", f"Invalid token: {reason}")

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return _error_response(401, "Unauthorized", "Token has expired.")


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        db.session.rollback()
        app.logger.exception("Unhandled application error", exc_info=error)
        return _error_response(500, "Internal Server Error", "An unexpected error occurred.")


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
