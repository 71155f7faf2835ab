"""Application factory."""

import os
import uuid

from flask import Flask, g, jsonify, request, send_file
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException, NotFound

from config import Config
from errors import ApiError, InternalError, StoreError
from models import db
from routes.admin import admin_bp
from routes.auth import auth_bp
from routes.ngo import ngo_bp
from routes.requests import requests_bp
from storage import LocalStorage
from utils.security import bcrypt

jwt = JWTManager()


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Core subsystems
    db.init_app(app)
    bcrypt.init_app(app)
    jwt.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Ensure uploads directory exists
    upload_dir = app.config.get("UPLOAD_DIR")
    if upload_dir:
        os.makedirs(upload_dir, exist_ok=True)

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(requests_bp, url_prefix="/api/requests")
    app.register_blueprint(ngo_bp, url_prefix="/api/ngo")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")

    @app.route("/", methods=["GET"])
    def index():
        return "Blood donation backend running"

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"ok": True, "status": "ok"})

    @app.route("/uploads/<path:filename>", methods=["GET"])
    def uploaded_file(filename: str):
        """Serve a stored photo."""
        storage = LocalStorage(app.config.get("UPLOAD_DIR"))
        if not storage.exists(filename):
            raise NotFound("Stored file could not be found.")
        return send_file(storage.open(filename), download_name=filename)

    # Errors
    _register_error_handlers(app)

    app.logger.info("Document store at %s", app.config.get("DATABASE_PATH"))
    return app


def _error_response(message: str, status: int):
    request_id = g.get("request_id") or str(uuid.uuid4())
    response = jsonify({"ok": False, "error": message, "request_id": request_id})
    response.status_code = status
    response.headers.setdefault("X-Request-ID", request_id)
    return response


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        if isinstance(error, ApiError):
            message = error.description
        else:
            message = error.name
        response = _error_response(message, error.code or 500)
        # Keep protocol headers such as Allow on 405 or WWW-Authenticate.
        for key, value in error.get_response().headers.items():
            if key.lower() not in {"content-type", "content-length"}:
                response.headers.setdefault(key, value)
        return response

    @app.errorhandler(StoreError)
    def _handle_store_error(error: StoreError):
        app.logger.error("Document store failure: %s", error)
        return _error_response(InternalError.description, InternalError.code)

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        app.logger.exception("Unhandled application error", exc_info=error)
        return _error_response(InternalError.description, InternalError.code)


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 4000)))
