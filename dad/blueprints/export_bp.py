"""
Maturity matrix export endpoint.

    POST /api/v1/export
        format: excel | csv (query string, default: excel)

Body:
    projects:   list (or id-keyed object) of projects, exported in that order
    services:   functional services (columns, grouped by package)
    entities:   business units / service centers (optional)
    users:      users, to resolve project managers (optional)
    exportDate: date printed in the workbook header (optional, default today)

No temp files - content returned in-memory.
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, Response, current_app, request

from dad.blueprints import json_body, load_records
from dad.models.entity import Entity
from dad.models.indicator import FunctionalService
from dad.models.project import Project
from dad.models.user import User
from dad.services.export_service import generate_matrix_csv, generate_matrix_xlsx
from dad.utils.errors import E, api_error
from dad.utils.helpers import parse_date

logger = logging.getLogger(__name__)

export_bp = Blueprint("export", __name__, url_prefix="/api/v1")

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@export_bp.route("/export", methods=["POST"])
def export_matrix():
    """Export the maturity matrix of the given projects.

    Supported formats: excel (.xlsx), csv.

    Returns:
        Binary file download (xlsx or csv) with correct Content-Disposition.
    """
    fmt = request.args.get("format", "excel").lower()
    if fmt not in ("excel", "csv"):
        return api_error(
            E.VALIDATION_INVALID,
            "Unsupported format. Supported values: excel, csv.",
            details={"format": fmt},
        )

    payload = json_body()
    projects = load_records(payload, "projects", Project)
    services = load_records(payload, "services", FunctionalService)
    entities = load_records(payload, "entities", Entity, required=False)
    users = load_records(payload, "users", User, required=False)
    export_date = parse_date(payload.get("exportDate"))

    date_str = datetime.now(timezone.utc).strftime("%Y%m%d")

    try:
        if fmt == "excel":
            content = generate_matrix_xlsx(
                projects,
                services,
                entities,
                users,
                export_date=export_date,
                sheet_title=current_app.config["EXPORT_SHEET_TITLE"],
            )
            filename = f"MatrixMaturity_{date_str}.xlsx"
            return Response(
                content,
                mimetype=XLSX_MIMETYPE,
                headers={"Content-Disposition": f"attachment; filename={filename}"},
            )

        else:  # csv
            content = generate_matrix_csv(projects, services, entities)
            filename = f"MatrixMaturity_{date_str}.csv"
            return Response(
                content,
                mimetype="text/csv",
                headers={"Content-Disposition": f"attachment; filename={filename}"},
            )

    except Exception:
        logger.exception(
            "Export failed for %d projects format=%s",
            len(projects),
            fmt,
            extra={"export_format": fmt, "error_code": E.EXPORT},
        )
        return api_error(E.EXPORT, "Export failed. Please try again.")
