"""
Maturity matrix blueprint - option locking and service status.

Endpoints:
    POST /api/v1/matrix/options   - dropdown options for one matrix line
    POST /api/v1/matrix/status    - aggregated indicator status of a functional service

Layer contract:
    - Stateless: everything the computation needs travels in the body.
    - No business rules here - delegated to admin_lock / status_resolver.
"""

import logging

from flask import Blueprint, jsonify

from dad.blueprints import json_body, load_records
from dad.core.exceptions import ValidationError
from dad.models.indicator import FunctionalService, Indicator
from dad.models.user import Role
from dad.services.admin_lock import get_deployed_options, get_progress_options
from dad.services.options import DEPLOYED_OPTIONS, PROGRESS_OPTIONS
from dad.services.status_resolver import get_service_status

logger = logging.getLogger(__name__)

matrix_bp = Blueprint("matrix", __name__, url_prefix="/api/v1/matrix")


def _is_admin(payload: dict) -> bool:
    """``role`` wins over the ``isAdmin`` flag when both are sent."""
    if "role" in payload:
        role = Role.parse(payload.get("role"))
        if role is None:
            raise ValidationError(
                "Unknown role",
                details={"role": f"expected one of {', '.join(r.value for r in Role)}"},
            )
        return role.is_admin
    return payload.get("isAdmin") is True


@matrix_bp.route("/options", methods=["POST"])
def matrix_options():
    """Options to render for a matrix line, with admin-only entries disabled.

    Body:
        progress: current progress level (int, -1 or null)
        goal:     current goal level (int, -1 or null)
        deployed: current deployment state ("no" / "yes")
        role | isAdmin: who is editing
    """
    payload = json_body()
    is_admin = _is_admin(payload)

    return jsonify({
        "progress": [
            o.to_dict() for o in get_progress_options(PROGRESS_OPTIONS, payload.get("progress"), is_admin)
        ],
        "goal": [
            o.to_dict() for o in get_progress_options(PROGRESS_OPTIONS, payload.get("goal"), is_admin)
        ],
        "deployed": [
            o.to_dict() for o in get_deployed_options(DEPLOYED_OPTIONS, payload.get("deployed"), is_admin)
        ],
    })


@matrix_bp.route("/status", methods=["POST"])
def service_status():
    """Status shown in a functional service's header cell.

    Body:
        service:    functional service ({id, name, package, services})
        indicators: list (or id-keyed object) of indicators
    """
    payload = json_body()
    if "service" not in payload:
        raise ValidationError("service is required", details={"service": "required"})
    service = FunctionalService.from_dict(payload["service"])
    indicators = load_records(payload, "indicators", Indicator, required=False)

    status = get_service_status(service, indicators)
    logger.debug(
        "Status for %s over %d indicators: %s",
        service.id, len(indicators), status.text if status else None,
    )
    return jsonify({"status": status.to_dict() if status else None})
