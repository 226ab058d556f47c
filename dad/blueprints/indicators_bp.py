"""
Indicators blueprint.

Endpoints:
    POST /api/v1/indicators/filter   - indicators whose fields contain the filter text
"""

from flask import Blueprint, jsonify

from dad.blueprints import filter_text, json_body, load_records
from dad.models.indicator import Indicator
from dad.services.project_filter import get_filtered_indicators

indicators_bp = Blueprint("indicators", __name__, url_prefix="/api/v1/indicators")


@indicators_bp.route("/filter", methods=["POST"])
def filter_indicators():
    payload = json_body()
    indicators = load_records(payload, "indicators", Indicator)
    filter_value = filter_text(payload)
    return jsonify([i.to_dict() for i in get_filtered_indicators(indicators, filter_value)])
