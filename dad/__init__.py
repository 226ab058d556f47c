"""
D.A.D maturity engine
Flask Application Factory.

Usage:
    from dad import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

from flask import Flask, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from dad.config import config
from dad.core.exceptions import NotFoundError, ValidationError
from dad.middleware.logging_config import configure_logging
from dad.middleware.rate_limiter import init_rate_limits
from dad.middleware.timing import init_request_timing
from dad.utils.errors import E, api_error

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],                     # no global limit - apply per-blueprint
    storage_uri=os.getenv("RATELIMIT_STORAGE_URI", "memory://"),
)


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__)
    # ProductionConfig.__init__ checks required env vars
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    limiter.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()])
    else:
        CORS(app)

    # ── Request timing middleware ────────────────────────────────────────
    init_request_timing(app)

    # ── Request guard (Content-Type) ─────────────────────────────────────
    @app.before_request
    def _guard_request():
        if request.method == "POST" and request.path.startswith("/api/"):
            ct = request.content_type or ""
            if request.data and "json" not in ct:
                return api_error(
                    E.VALIDATION_INVALID,
                    "Content-Type must be application/json",
                    status=415,
                )
        return None

    # ── Blueprints ───────────────────────────────────────────────────────
    from dad.blueprints.export_bp import export_bp
    from dad.blueprints.health_bp import health_bp
    from dad.blueprints.indicators_bp import indicators_bp
    from dad.blueprints.matrix_bp import matrix_bp
    from dad.blueprints.options_bp import options_bp
    from dad.blueprints.projects_bp import projects_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(options_bp)
    app.register_blueprint(matrix_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(indicators_bp)
    app.register_blueprint(export_bp)

    # ── Error handlers ───────────────────────────────────────────────────
    @app.errorhandler(ValidationError)
    def validation_error(e):
        logger.info("Rejected payload on %s: %s", request.path, e)
        return api_error(E.VALIDATION_INVALID, str(e), details=e.details)

    @app.errorhandler(NotFoundError)
    def resource_not_found(e):
        return api_error(E.NOT_FOUND, str(e))

    @app.errorhandler(404)
    def not_found(e):
        return api_error(E.NOT_FOUND, "Not found", details={"path": request.path})

    @app.errorhandler(405)
    def method_not_allowed(e):
        return api_error(E.METHOD_NOT_ALLOWED, "Method not allowed")

    @app.errorhandler(413)
    def payload_too_large(e):
        return api_error(E.VALIDATION_INVALID, "Request body too large", status=413)

    @app.errorhandler(429)
    def rate_limited(e):
        return api_error(E.RATE_LIMITED, "Too many requests", details={"retry_after": e.description})

    @app.errorhandler(500)
    def server_error(e):
        logger.error("500 error on %s: %s", request.path, e, exc_info=True)
        return api_error(E.INTERNAL, "Internal server error")

    # ── Rate limiting (after blueprints registered) ──────────────────────
    init_rate_limits(app, limiter)

    return app
