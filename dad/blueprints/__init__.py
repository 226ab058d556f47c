"""
D.A.D maturity engine
Blueprint registry and shared request helpers.
"""

from flask import request

from dad.core.exceptions import ValidationError


def json_body() -> dict:
    """Return the request's JSON object, raising ValidationError otherwise."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object", details={"body": "expected object"})
    return payload


def filter_text(payload: dict) -> str:
    """Return the ``filter`` member; null or missing gives "", other types a 400."""
    value = payload.get("filter")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(
            "filter must be a string",
            details={"filter": f"expected string, got {type(value).__name__}"},
        )
    return value


def load_records(payload: dict, key: str, record_cls, *, required: bool = True) -> list:
    """Decode ``payload[key]`` (a list or an id-keyed object) into records.

    Raises:
        ValidationError: the key is missing while required, or is neither a
            list nor an object.
    """
    raw = payload.get(key)
    if raw is None:
        if required:
            raise ValidationError(f"{key} is required", details={key: "required"})
        return []
    if isinstance(raw, dict):
        raw = list(raw.values())
    if not isinstance(raw, list):
        raise ValidationError(
            f"{key} must be a list",
            details={key: f"expected list, got {type(raw).__name__}"},
        )
    return [record_cls.from_dict(item) for item in raw]


def paginate_list(items: list, default_limit=200, max_limit=1000):
    """Apply limit/offset pagination to an already computed list.

    Query params:
        limit  - max items (default 200, capped at max_limit)
        offset - starting position (default 0)

    Returns:
        (items_page, total_count)
    """
    total = len(items)
    try:
        limit = min(int(request.args.get("limit", default_limit)), max_limit)
    except (ValueError, TypeError):
        limit = default_limit
    try:
        offset = max(int(request.args.get("offset", 0)), 0)
    except (ValueError, TypeError):
        offset = 0
    return items[offset:offset + max(limit, 0)], total
