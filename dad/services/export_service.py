"""
Maturity matrix export - the deployment plan workbook.

One worksheet, three header rows:
    row 1  "Matrix Maturity" | <package> (4 columns per service) ...
    row 2  "Export Date: DD/MM/YYYY" | <service name, rotated> ...
    row 3  project columns | Progress | Goal | Priority | Due Date ...
then one row per project.

No temp files are written; the workbook is returned as in-memory bytes.
A flat CSV (one line per project and service) is available for bulk
extraction.
"""

import csv
import io
import logging
from datetime import date, datetime

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from dad.models.entity import Entity
from dad.models.project import Project
from dad.models.user import User
from dad.services.catalog_service import sorted_packages
from dad.services.options import level_text
from dad.utils.helpers import as_list

logger = logging.getLogger(__name__)

DEFAULT_SHEET_TITLE = "Plan de déploiement"
NOT_AVAILABLE = "N/A"
DATE_FORMAT = "DD/MM/YYYY"

HEADER_FILL = PatternFill(start_color="C00000", end_color="C00000", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
THIN_BORDER = Border(
    left=Side(style="thin", color="000000"),
    right=Side(style="thin", color="000000"),
    top=Side(style="thin", color="000000"),
    bottom=Side(style="thin", color="000000"),
)
CENTERED = Alignment(horizontal="center", vertical="center", wrap_text=True)
ROTATED = Alignment(horizontal="center", vertical="center", text_rotation=90)

PROJECT_COLUMNS = [
    "Project",
    "Business",
    "Service Center",
    "Domain",
    "Client",
    "Project Manager",
    "Technologies",
    "Deployment Mode",
    "Version Control System",
    "Deliverables in VCS",
    "Source Code in VCS",
    "Specifications in VCS",
    "Creation Date",
    "Last Update",
    "Comments",
]
SERVICE_COLUMNS = ["Progress", "Goal", "Priority", "Due Date"]

COLUMN_WIDTH = 12.0
SERVICE_NAME_ROW_HEIGHT = 283.5   # 10 cm
POINTS_PER_HALF_CM = 14.175


def _by_id(items) -> dict:
    return {item.id: item for item in as_list(items)}


def _excel_date(value):
    """Excel has no time zones: keep the calendar date only."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def _write_merged(ws, row: int, col: int, span: int, value, alignment=CENTERED) -> int:
    """Write ``value`` in a cell merged over ``span`` columns; returns the next column."""
    span = max(span, 1)
    cell = ws.cell(row=row, column=col, value=value)
    cell.alignment = alignment
    if span > 1:
        ws.merge_cells(start_row=row, start_column=col, end_row=row, end_column=col + span - 1)
    return col + span


def _write_date(ws, row: int, col: int, value) -> None:
    day = _excel_date(value)
    if day is None:
        ws.cell(row=row, column=col, value=NOT_AVAILABLE)
        return
    cell = ws.cell(row=row, column=col, value=day)
    cell.number_format = DATE_FORMAT


def _project_comments(project: Project, packages) -> str:
    comments = []
    for package, services in packages:
        for service in services:
            entry = project.entry_for(service.id)
            if entry is not None and entry.comment:
                comments.append(f"{package}: {service.name}: {entry.comment}")
    return "\n".join(comments)


def generate_matrix_xlsx(
    projects,
    services,
    entities=None,
    users=None,
    *,
    export_date: date | None = None,
    sheet_title: str = DEFAULT_SHEET_TITLE,
) -> bytes:
    """Generate the deployment plan workbook (.xlsx).

    Args:
        projects: Projects to export, one row each, in the given order.
        services: Functional services; columns are grouped by package,
            packages sorted by name.
        entities: Business units / service centers (list or id-keyed dict).
            Unknown ids print as "N/A".
        users: Users, to resolve project managers. Unknown ids print "N/A".
        export_date: Date printed in the header (default: today).
        sheet_title: Worksheet name.

    Returns:
        bytes: Raw .xlsx file content ready to stream to the client.
    """
    packages = sorted_packages(services)
    entities_by_id = _by_id(entities)
    users_by_id = _by_id(users)
    export_date = export_date or date.today()

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    # ── Header rows ──────────────────────────────────────────────────────────
    nb_project_cols = len(PROJECT_COLUMNS)
    next_pkg_col = _write_merged(ws, 1, 1, nb_project_cols, "Matrix Maturity")
    next_name_col = _write_merged(
        ws, 2, 1, nb_project_cols, f"Export Date: {export_date.strftime('%d/%m/%Y')}",
    )
    for col, header in enumerate(PROJECT_COLUMNS, 1):
        ws.cell(row=3, column=col, value=header)

    for package, package_services in packages:
        next_pkg_col = _write_merged(
            ws, 1, next_pkg_col, len(package_services) * len(SERVICE_COLUMNS), package,
        )
        for service in package_services:
            first_col = next_name_col
            next_name_col = _write_merged(
                ws, 2, next_name_col, len(SERVICE_COLUMNS), service.name, alignment=ROTATED,
            )
            for offset, header in enumerate(SERVICE_COLUMNS):
                ws.cell(row=3, column=first_col + offset, value=header)

    last_col = next_name_col - 1
    ws.row_dimensions[2].height = SERVICE_NAME_ROW_HEIGHT

    # ── One row per project ──────────────────────────────────────────────────
    for row, project in enumerate(as_list(projects), 4):
        business_unit = entities_by_id.get(project.business_unit) or Entity(id="", name=NOT_AVAILABLE)
        service_center = entities_by_id.get(project.service_center) or Entity(id="", name=NOT_AVAILABLE)
        manager = users_by_id.get(project.project_manager) or User(id="", display_name=NOT_AVAILABLE)

        values = [
            project.name,
            business_unit.name,
            service_center.name,
            "; ".join(project.domain) or NOT_AVAILABLE,
            project.client,
            manager.display_name,
            ", ".join(project.technologies),
            project.mode,
            project.version_control_system,
            "Yes" if project.deliverables else "No",
            "Yes" if project.source_code else "No",
            "Yes" if project.specifications else "No",
        ]
        for col, value in enumerate(values, 1):
            ws.cell(row=row, column=col, value=value)
        _write_date(ws, row, 13, project.created)
        _write_date(ws, row, 14, project.updated)

        comments = _project_comments(project, packages)
        ws.cell(row=row, column=15, value=comments)
        ws.row_dimensions[row].height = POINTS_PER_HALF_CM * (comments.count("\n") + 1)

        col = nb_project_cols + 1
        for _package, package_services in packages:
            for service in package_services:
                entry = project.entry_for(service.id)
                if entry is None:
                    for offset in range(len(SERVICE_COLUMNS)):
                        ws.cell(row=row, column=col + offset, value=NOT_AVAILABLE)
                else:
                    ws.cell(row=row, column=col, value=level_text(entry.progress))
                    ws.cell(row=row, column=col + 1, value=level_text(entry.goal))
                    ws.cell(row=row, column=col + 2, value=entry.priority or NOT_AVAILABLE)
                    _write_date(ws, row, col + 3, entry.due_date)
                col += len(SERVICE_COLUMNS)

    # ── Styling ──────────────────────────────────────────────────────────────
    for cells in ws.iter_rows(min_row=1, max_row=ws.max_row, max_col=last_col):
        for cell in cells:
            cell.border = THIN_BORDER
            if cell.row <= 3:
                cell.fill = HEADER_FILL
                cell.font = HEADER_FONT
            if cell.alignment.text_rotation != 90:
                cell.alignment = CENTERED
    for col in range(1, last_col + 1):
        ws.column_dimensions[get_column_letter(col)].width = COLUMN_WIDTH

    logger.info(
        "Matrix export generated: %d projects, %d packages, %d columns",
        ws.max_row - 3, len(packages), last_col,
    )

    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf.getvalue()


def generate_matrix_csv(projects, services, entities=None) -> str:
    """Flat CSV: one line per project and functional service.

    Services missing from a project's matrix are written with "N/A" levels.

    Returns:
        str: CSV content as a UTF-8 string.
    """
    entities_by_id = _by_id(entities)
    packages = sorted_packages(services)

    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow([
        "project", "business_unit", "service_center", "package", "service",
        "deployed", "progress", "goal", "priority", "due_date", "comment",
    ])
    for project in as_list(projects):
        bu = entities_by_id.get(project.business_unit)
        sc = entities_by_id.get(project.service_center)
        for package, package_services in packages:
            for service in package_services:
                entry = project.entry_for(service.id)
                writer.writerow([
                    project.name,
                    bu.name if bu else NOT_AVAILABLE,
                    sc.name if sc else NOT_AVAILABLE,
                    package,
                    service.name,
                    entry.deployed if entry else NOT_AVAILABLE,
                    level_text(entry.progress if entry else None),
                    level_text(entry.goal if entry else None),
                    (entry.priority if entry else None) or NOT_AVAILABLE,
                    entry.due_date.isoformat() if entry and entry.due_date else "",
                    (entry.comment if entry else "").replace("\n", " "),
                ])
    return buf.getvalue()
