"""
Tests for the maturity matrix export.

Covers:
  - generate_matrix_xlsx returns bytes (.xlsx)
  - Header rows: title, export date, packages sorted, rotated service names
  - Project rows: entity / manager names, N/A fallbacks, Yes/No flags
  - Matrix cells: level text, priority, due date, N/A for missing lines
  - Comments column joins per-service comments
  - generate_matrix_csv: one line per project and service
  - Export endpoint returns xlsx / csv downloads, 400 for unsupported format
"""

import csv
import io
from datetime import date, datetime

import pytest
from openpyxl import load_workbook

from dad.models.user import User
from dad.services.export_service import (
    DEFAULT_SHEET_TITLE,
    PROJECT_COLUMNS,
    generate_matrix_csv,
    generate_matrix_xlsx,
)


# ── Helpers ─────────────────────────────────────────────────────────────────


@pytest.fixture()
def users():
    return [User(id="u1", username="jdoe", display_name="Jane Doe")]


@pytest.fixture()
def export_projects(make_project):
    return [
        make_project(
            "p1", "Alpha",
            domain=["Banking", "Retail"], client="ACME", projectManager="u1",
            businessUnit="bu-1", serviceCenter="sc-1", technologies=["Java", "Go"],
            mode="SaaS", versionControlSystem="GitLab", deliverables=True,
            created="2023-05-04T08:00:00Z",
            matrix=[
                {"service": "ci", "progress": 3, "goal": 5, "priority": "P0",
                 "dueDate": "2024-06-30", "comment": "pipeline migration"},
                {"service": "wiki", "progress": -1, "goal": -1, "comment": "not needed"},
            ],
        ),
        make_project("p2", "Beta", projectManager="ghost", businessUnit="unknown"),
    ]


def _sheet(content):
    return load_workbook(io.BytesIO(content)).active


# ── Tests: generate_matrix_xlsx ─────────────────────────────────────────────


class TestMatrixWorkbook:
    def test_returns_bytes(self, export_projects, services, entities, users):
        result = generate_matrix_xlsx(export_projects, services, entities, users)
        assert isinstance(result, bytes)
        assert len(result) > 0

    def test_sheet_title(self, export_projects, services):
        ws = _sheet(generate_matrix_xlsx(export_projects, services))
        assert ws.title == DEFAULT_SHEET_TITLE

    def test_header_rows(self, export_projects, services):
        ws = _sheet(generate_matrix_xlsx(export_projects, services, export_date=date(2024, 2, 1)))
        first_service_col = len(PROJECT_COLUMNS) + 1

        assert ws.cell(row=1, column=1).value == "Matrix Maturity"
        assert ws.cell(row=2, column=1).value == "Export Date: 01/02/2024"
        # packages sorted by name, 4 columns per service
        assert ws.cell(row=1, column=first_service_col).value == "Build"
        assert ws.cell(row=1, column=first_service_col + 8).value == "Collaborate"
        assert ws.cell(row=2, column=first_service_col).value == "Continuous Integration"
        assert ws.cell(row=2, column=first_service_col).alignment.text_rotation == 90
        assert ws.cell(row=2, column=first_service_col + 4).value == "Source Control"
        assert ws.cell(row=3, column=1).value == "Project"
        assert [ws.cell(row=3, column=first_service_col + i).value for i in range(4)] == [
            "Progress", "Goal", "Priority", "Due Date",
        ]

    def test_header_cells_merged(self, export_projects, services):
        ws = _sheet(generate_matrix_xlsx(export_projects, services))
        merged = {str(r) for r in ws.merged_cells.ranges}
        assert "A1:O1" in merged
        assert "A2:O2" in merged

    def test_project_row(self, export_projects, services, entities, users):
        ws = _sheet(generate_matrix_xlsx(export_projects, services, entities, users))
        row = [ws.cell(row=4, column=c).value for c in range(1, 13)]
        assert row == [
            "Alpha", "Défense", "Bordeaux", "Banking; Retail", "ACME", "Jane Doe",
            "Java, Go", "SaaS", "GitLab", "Yes", "No", "No",
        ]
        created = ws.cell(row=4, column=13).value
        assert isinstance(created, datetime)
        assert created.date() == date(2023, 5, 4)
        assert ws.cell(row=4, column=14).value == "N/A"

    def test_unknown_references_print_na(self, export_projects, services, entities, users):
        ws = _sheet(generate_matrix_xlsx(export_projects, services, entities, users))
        assert ws.cell(row=5, column=1).value == "Beta"
        assert ws.cell(row=5, column=2).value == "N/A"
        assert ws.cell(row=5, column=4).value == "N/A"
        assert ws.cell(row=5, column=6).value == "N/A"

    def test_matrix_cells(self, export_projects, services):
        ws = _sheet(generate_matrix_xlsx(export_projects, services))
        col = len(PROJECT_COLUMNS) + 1
        assert [ws.cell(row=4, column=col + i).value for i in range(3)] == ["60%", "100%", "P0"]
        due = ws.cell(row=4, column=col + 3)
        assert due.value.date() == date(2024, 6, 30)
        assert due.number_format == "DD/MM/YYYY"
        # Source Control: no matrix line
        assert [ws.cell(row=4, column=col + 4 + i).value for i in range(4)] == ["N/A"] * 4
        # Wiki: line present, levels not applicable
        assert [ws.cell(row=4, column=col + 8 + i).value for i in range(4)] == ["N/A"] * 4

    def test_comments_column(self, export_projects, services):
        ws = _sheet(generate_matrix_xlsx(export_projects, services))
        assert ws.cell(row=4, column=15).value == (
            "Build: Continuous Integration: pipeline migration\n"
            "Collaborate: Wiki: not needed"
        )
        assert ws.cell(row=5, column=15).value in (None, "")

    def test_no_projects(self, services):
        ws = _sheet(generate_matrix_xlsx([], services))
        assert ws.max_row == 3


# ── Tests: generate_matrix_csv ──────────────────────────────────────────────


class TestMatrixCsv:
    def test_one_line_per_project_and_service(self, export_projects, services, entities):
        rows = list(csv.reader(io.StringIO(generate_matrix_csv(export_projects, services, entities))))
        assert rows[0][:5] == ["project", "business_unit", "service_center", "package", "service"]
        assert len(rows) == 1 + len(export_projects) * len(services)

    def test_values(self, export_projects, services, entities):
        rows = list(csv.DictReader(io.StringIO(generate_matrix_csv(export_projects, services, entities))))
        ci = rows[0]
        assert ci["project"] == "Alpha"
        assert ci["business_unit"] == "Défense"
        assert ci["service"] == "Continuous Integration"
        assert ci["progress"] == "60%"
        assert ci["due_date"] == "2024-06-30"
        beta = [r for r in rows if r["project"] == "Beta"]
        assert all(r["progress"] == "N/A" and r["business_unit"] == "N/A" for r in beta)


# ── Tests: export endpoint ──────────────────────────────────────────────────


def _export_body():
    return {
        "projects": [{"id": "p1", "name": "Alpha", "matrix": [{"service": "ci", "progress": 2, "goal": 4}]}],
        "services": [{"id": "ci", "name": "CI", "package": "Build", "services": ["jenkins"]}],
        "exportDate": "2024-02-01",
    }


class TestExportEndpoint:
    def test_excel_download(self, client):
        res = client.post("/api/v1/export", json=_export_body())
        assert res.status_code == 200
        assert res.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        assert "attachment; filename=MatrixMaturity_" in res.headers["Content-Disposition"]
        ws = _sheet(res.data)
        assert ws.cell(row=2, column=1).value == "Export Date: 01/02/2024"
        assert ws.cell(row=4, column=1).value == "Alpha"

    def test_csv_download(self, client):
        res = client.post("/api/v1/export?format=csv", json=_export_body())
        assert res.status_code == 200
        assert res.mimetype == "text/csv"
        assert res.headers["Content-Disposition"].endswith(".csv")
        assert "Alpha" in res.get_data(as_text=True)

    def test_unsupported_format(self, client):
        res = client.post("/api/v1/export?format=pdf", json=_export_body())
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_INVALID"

    def test_services_required(self, client):
        body = _export_body()
        del body["services"]
        res = client.post("/api/v1/export", json=body)
        assert res.status_code == 400
        assert res.get_json()["details"] == {"services": "required"}

    def test_generation_failure_returns_500(self, client, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr("dad.blueprints.export_bp.generate_matrix_xlsx", boom)
        res = client.post("/api/v1/export", json=_export_body())
        assert res.status_code == 500
        assert res.get_json()["code"] == "ERR_EXPORT"
