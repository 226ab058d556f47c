"""Project and its maturity matrix."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from dad.core.exceptions import ValidationError
from dad.utils.helpers import from_level, parse_date, parse_datetime, text_field

PRIORITY_NOT_APPLICABLE = "N/A"
DEPLOYED_NO = "no"


def _require_mapping(payload: Any, resource: str) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError(
            f"{resource} must be a JSON object",
            details={resource: f"expected object, got {type(payload).__name__}"},
        )
    return payload


def _string_list(payload: dict, key: str, resource: str) -> list[str]:
    value = payload.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        # older documents stored a single consolidation criterion as a string
        return [value] if value else []
    if not isinstance(value, list):
        raise ValidationError(
            f"{resource}.{key} must be a list",
            details={key: f"expected list, got {type(value).__name__}"},
        )
    return [str(v) for v in value]


def _level(payload: dict, key: str) -> int | None:
    """Decode a progress/goal level; negative values mean "not applicable"."""
    from dad.services.options import PROGRESS_OPTIONS

    value = payload.get(key)
    if value is None:
        return None
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or (isinstance(value, float) and not value.is_integer())
    ):
        raise ValidationError(
            f"matrix.{key} must be an integer level",
            details={key: f"expected integer, got {value!r}"},
        )
    if value < 0:
        return None
    level = int(value)
    if level not in {option.value for option in PROGRESS_OPTIONS}:
        raise ValidationError(
            f"matrix.{key} is not a known level",
            details={key: f"unknown level {level}"},
        )
    return level


@dataclass
class MatrixEntry:
    """One project's stance on one functional service.

    ``progress`` and ``goal`` are ``None`` when not applicable (``-1`` on the
    wire); ``priority`` is ``None`` for "N/A".
    """

    service: str
    progress: int | None = None
    goal: int | None = None
    priority: str | None = None
    deployed: str = DEPLOYED_NO
    due_date: date | None = None
    comment: str = ""

    @classmethod
    def from_dict(cls, payload: dict) -> MatrixEntry:
        payload = _require_mapping(payload, "matrix")
        service = payload.get("service")
        if not service:
            raise ValidationError(
                "matrix entry requires a service",
                details={"service": "required"},
            )
        priority = payload.get("priority") or None
        if priority == PRIORITY_NOT_APPLICABLE:
            priority = None
        return cls(
            service=str(service),
            progress=_level(payload, "progress"),
            goal=_level(payload, "goal"),
            priority=priority,
            deployed=text_field(payload, "deployed", "matrix", DEPLOYED_NO),
            due_date=parse_date(payload.get("dueDate")),
            comment=text_field(payload, "comment", "matrix"),
        )

    def to_dict(self) -> dict:
        return {
            "service": self.service,
            "progress": from_level(self.progress),
            "goal": from_level(self.goal),
            "priority": self.priority or PRIORITY_NOT_APPLICABLE,
            "deployed": self.deployed,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "comment": self.comment,
        }


@dataclass
class Project:
    """A software project and its maturity matrix."""

    id: str
    name: str = ""
    description: str = ""
    domain: list[str] = field(default_factory=list)
    client: str = ""
    project_manager: str = ""
    deputies: list[str] = field(default_factory=list)
    business_unit: str = ""
    service_center: str = ""
    matrix: list[MatrixEntry] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    mode: str = ""
    version_control_system: str = ""
    deliverables: bool = False
    source_code: bool = False
    specifications: bool = False
    is_cdk_applicable: bool = False
    explanation: str = ""
    docktor_group_name: str = ""
    docktor_group_url: str = ""
    created: datetime | None = None
    updated: datetime | None = None

    @classmethod
    def from_dict(cls, payload: dict) -> Project:
        payload = _require_mapping(payload, "project")
        raw_matrix = payload.get("matrix") or []
        if not isinstance(raw_matrix, list):
            raise ValidationError(
                "project.matrix must be a list",
                details={"matrix": f"expected list, got {type(raw_matrix).__name__}"},
            )
        # Unique by service: a later line for the same service wins.
        entries: dict[str, MatrixEntry] = {}
        for line in raw_matrix:
            entry = MatrixEntry.from_dict(line)
            entries[entry.service] = entry

        return cls(
            id=str(payload.get("id") or ""),
            name=text_field(payload, "name", "project"),
            description=text_field(payload, "description", "project"),
            domain=_string_list(payload, "domain", "project"),
            client=text_field(payload, "client", "project"),
            project_manager=text_field(payload, "projectManager", "project"),
            deputies=_string_list(payload, "deputies", "project"),
            business_unit=text_field(payload, "businessUnit", "project"),
            service_center=text_field(payload, "serviceCenter", "project"),
            matrix=list(entries.values()),
            technologies=_string_list(payload, "technologies", "project"),
            mode=text_field(payload, "mode", "project"),
            version_control_system=text_field(payload, "versionControlSystem", "project"),
            deliverables=bool(payload.get("deliverables")),
            source_code=bool(payload.get("sourceCode")),
            specifications=bool(payload.get("specifications")),
            is_cdk_applicable=bool(payload.get("isCDKApplicable")),
            explanation=text_field(payload, "explanation", "project"),
            docktor_group_name=text_field(payload, "docktorGroupName", "project"),
            docktor_group_url=text_field(payload, "docktorGroupURL", "project"),
            created=parse_datetime(payload.get("created")),
            updated=parse_datetime(payload.get("updated")),
        )

    def entry_for(self, service_id: str) -> MatrixEntry | None:
        """Return the matrix line for ``service_id``, if the project has one."""
        for entry in self.matrix:
            if entry.service == service_id:
                return entry
        return None

    def to_dict(self) -> dict:
        """Serialize back to the backend's flattened JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "domain": list(self.domain),
            "client": self.client,
            "projectManager": self.project_manager,
            "deputies": list(self.deputies),
            "businessUnit": self.business_unit,
            "serviceCenter": self.service_center,
            "matrix": [entry.to_dict() for entry in self.matrix],
            "technologies": list(self.technologies),
            "mode": self.mode,
            "versionControlSystem": self.version_control_system,
            "deliverables": self.deliverables,
            "sourceCode": self.source_code,
            "specifications": self.specifications,
            "isCDKApplicable": self.is_cdk_applicable,
            "explanation": self.explanation,
            "docktorGroupName": self.docktor_group_name,
            "docktorGroupURL": self.docktor_group_url,
            "created": self.created.isoformat() if self.created else None,
            "updated": self.updated.isoformat() if self.updated else None,
        }

    def __repr__(self) -> str:
        return f"<Project {self.id}: {self.name}>"
