"""
Option catalogs blueprint.

Endpoints:
    GET /api/v1/options             - every catalog, keyed by name
    GET /api/v1/options/<catalog>   - one catalog (progress, status, priorities, deployed)
"""

from flask import Blueprint, jsonify

from dad.services.options import CATALOGS, get_catalog

options_bp = Blueprint("options", __name__, url_prefix="/api/v1/options")


@options_bp.route("", methods=["GET"])
def list_catalogs():
    return jsonify({
        name: [option.to_dict() for option in options]
        for name, options in CATALOGS.items()
    })


@options_bp.route("/<string:catalog>", methods=["GET"])
def get_one(catalog: str):
    """Return one catalog; unknown names map to 404 via NotFoundError."""
    return jsonify([option.to_dict() for option in get_catalog(catalog)])
