"""Flask application factory for the prize wheel."""

from __future__ import annotations

from pathlib import Path

from flask import Flask, jsonify
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from werkzeug.exceptions import HTTPException

from config import Config
from core import BusinessDefaults, get_logger
from core.exceptions import ApplicationError, StoreError
from database import init_database
from database.models import BusinessConfig
from services import BusinessConfigService, PrizeCatalog, SpinEngine
from web.auth import AdminSettings, init_login_manager
from web.config_middleware import (
    configure_app,
    setup_extensions,
    setup_metrics,
    setup_security_headers,
)
from web.routes import register_routes

logger = get_logger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"


def create_app(config: Config, testing: bool = False) -> Flask:
    """Create and configure Flask application.

    The database schema is expected to exist already; see
    ``core.app_initializer.ApplicationInitializer``.

    Args:
        config: Application configuration
        testing: Whether running in testing mode

    Returns:
        Configured Flask application
    """
    app = Flask(__name__, static_folder=str(PUBLIC_DIR), static_url_path="")

    configure_app(app, config, testing)
    setup_extensions(app)
    setup_security_headers(app)
    setup_metrics(app)

    init_login_manager(app, AdminSettings.from_config(config))
    _init_services(app, config)

    register_routes(app)
    _setup_routes(app)
    _setup_error_handlers(app)

    return app


def _init_services(app: Flask, config: Config) -> None:
    """Build the store-backed services and expose them through app.config."""
    init_database(config.database_path)

    defaults = BusinessConfig(
        business_name=config.business_name or BusinessDefaults.BUSINESS_NAME,
        instagram_qr_url=config.instagram_qr_url or BusinessDefaults.INSTAGRAM_QR_URL,
        exempt_dnis=config.exempt_dnis or BusinessDefaults.EXEMPT_DNIS,
    )
    config_service = BusinessConfigService(defaults)
    app.config["BUSINESS_CONFIG_SERVICE"] = config_service
    app.config["PRIZE_CATALOG"] = PrizeCatalog()
    app.config["SPIN_ENGINE"] = SpinEngine(config_service, cooldown_hours=config.cooldown_hours)


def _setup_routes(app: Flask) -> None:
    @app.route('/metrics')
    def metrics():
        """Expose Prometheus metrics."""
        return generate_latest(), 200, {'Content-Type': CONTENT_TYPE_LATEST}


def _setup_error_handlers(app: Flask) -> None:
    """Render every failure as ``{"error": ...}`` without internal detail."""
    @app.errorhandler(ApplicationError)
    def application_error(error: ApplicationError):
        if isinstance(error, StoreError):
            logger.error("Store failure: %r", error.__cause__)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        messages = {404: "No encontrado", 405: "Método no permitido"}
        return jsonify({"error": messages.get(error.code, error.name)}), error.code

    @app.errorhandler(500)
    def internal_error(error):
        logger.error("Internal server error: %r", getattr(error, "original_exception", error))
        return jsonify({"error": ApplicationError.default_message}), 500
