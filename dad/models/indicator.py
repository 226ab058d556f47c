"""Live usage indicators and the functional services they roll up into."""

from __future__ import annotations

from dataclasses import dataclass

from dad.core.exceptions import ValidationError
from dad.utils.helpers import text_field


@dataclass(frozen=True)
class Indicator:
    """Health signal of one technical service within a Docktor group."""

    service: str
    status: str = ""
    docktor_group: str = ""
    id: str = ""

    @classmethod
    def from_dict(cls, payload: dict) -> Indicator:
        if not isinstance(payload, dict):
            raise ValidationError(
                "indicator must be a JSON object",
                details={"indicator": f"expected object, got {type(payload).__name__}"},
            )
        return cls(
            service=str(payload.get("service") or ""),
            status=str(payload.get("status") or ""),
            docktor_group=str(payload.get("docktorGroup") or ""),
            id=str(payload.get("id") or ""),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "docktorGroup": self.docktor_group,
            "service": self.service,
            "status": self.status,
        }


@dataclass
class FunctionalService:
    """A named capability backed by one or more technical services.

    ``services`` is ``None`` when the catalog entry carries no member list
    at all, which is not the same thing as an empty list.
    """

    id: str
    name: str = ""
    package: str = ""
    services: list[str] | None = None

    @classmethod
    def from_dict(cls, payload: dict) -> FunctionalService:
        if not isinstance(payload, dict):
            raise ValidationError(
                "service must be a JSON object",
                details={"service": f"expected object, got {type(payload).__name__}"},
            )
        members = payload.get("services")
        if members is not None and not isinstance(members, list):
            raise ValidationError(
                "service.services must be a list",
                details={"services": f"expected list, got {type(members).__name__}"},
            )
        return cls(
            id=str(payload.get("id") or ""),
            name=text_field(payload, "name", "service"),
            package=text_field(payload, "package", "service"),
            services=[str(m) for m in members] if members is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "package": self.package,
            "services": list(self.services) if self.services is not None else None,
        }
