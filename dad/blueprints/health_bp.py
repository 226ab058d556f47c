"""
Health check blueprint.

Endpoints:
    GET /api/v1/health/ready  - simple 200 for load balancers
    GET /api/v1/health/live   - catalogs loaded + export engine version
"""

import logging

import openpyxl
from flask import Blueprint, jsonify

from dad.services.options import CATALOGS

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/api/v1/health")


@health_bp.route("/ready", methods=["GET"])
def ready():
    """Simple readiness probe - always 200 if app is running."""
    return jsonify({"status": "ok"}), 200


@health_bp.route("/live", methods=["GET"])
def live():
    """Liveness check with dependency status."""
    empty = [name for name, options in CATALOGS.items() if not options]
    checks = {
        "catalogs": {"status": "error" if empty else "ok", "count": len(CATALOGS)},
        "export": {"status": "ok", "openpyxl": openpyxl.__version__},
    }
    if empty:
        logger.error("Health check - empty catalogs: %s", ", ".join(empty))
        return jsonify({"status": "degraded", "checks": checks}), 503
    return jsonify({"status": "ok", "checks": checks}), 200
