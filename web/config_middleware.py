"""Flask application configuration and middleware setup."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from flask import Flask, g, request
from flask_cors import CORS
from prometheus_client import Counter, Histogram

if TYPE_CHECKING:
    from config import Config

# Prometheus metrics
REQUEST_LATENCY = Histogram(
    "prizewheel_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_ERRORS = Counter(
    "prizewheel_http_request_errors_total",
    "Total number of 5xx responses",
    ["method", "path"],
)
SPIN_OUTCOMES = Counter(
    "prizewheel_spins_total",
    "Spin attempts by outcome",
    ["outcome"],
)


def configure_app(app: Flask, config: Config, testing: bool = False) -> None:
    """Configure Flask application settings.

    Args:
        app: Flask application instance
        config: Application configuration
        testing: Whether running in testing mode
    """
    app.config.update(
        SECRET_KEY=config.secret_key,
        SEND_FILE_MAX_AGE_DEFAULT=3600,
        MAX_CONTENT_LENGTH=1024 * 1024,
        JSON_SORT_KEYS=False,
        DATABASE_PATH=config.database_path,
        TESTING=testing,
    )

    if config.is_production:
        if config.admin_code == "123456":
            app.logger.warning("Default ADMIN_CODE in use in production")
        if config.admin_session_secret == "change-me":
            app.logger.warning("Default ADMIN_SESSION_SECRET in use in production")
        if config.secret_key == "flask-secret-change-me":
            app.logger.warning("Default SECRET_KEY in use in production")
        if config.secret_key == config.admin_session_secret:
            app.logger.warning("SECRET_KEY should differ from ADMIN_SESSION_SECRET")


def setup_extensions(app: Flask) -> None:
    """Setup Flask extensions.

    Args:
        app: Flask application instance
    """
    CORS(app, resources={r"/api/*": {"origins": "*"}})


def setup_security_headers(app: Flask) -> None:
    """Setup security headers middleware.

    Args:
        app: Flask application instance
    """
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses."""
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'DENY')
        response.headers.setdefault('Referrer-Policy', 'same-origin')
        response.headers.setdefault('Permissions-Policy', "camera=(), microphone=(), geolocation=()")
        return response


def setup_metrics(app: Flask) -> None:
    """Setup Prometheus metrics middleware.

    Args:
        app: Flask application instance
    """
    @app.before_request
    def before_metrics():
        """Store request start time."""
        g._metrics_start = time.perf_counter()

    @app.after_request
    def after_metrics(response):
        """Record request metrics."""
        start = getattr(g, '_metrics_start', None)
        path = getattr(request.url_rule, 'rule', 'unmatched')
        if start is not None:
            REQUEST_LATENCY.labels(method=request.method, path=path).observe(time.perf_counter() - start)
        if response.status_code >= 500:
            REQUEST_ERRORS.labels(method=request.method, path=path).inc()
        return response
