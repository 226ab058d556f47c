"""Organizational entities (business units and service centers)."""

from __future__ import annotations

from dataclasses import dataclass

from dad.core.exceptions import ValidationError
from dad.utils.helpers import text_field

BUSINESS_UNIT = "businessUnit"
SERVICE_CENTER = "serviceCenter"


@dataclass(frozen=True)
class Entity:
    id: str
    name: str = ""
    type: str = ""

    @classmethod
    def from_dict(cls, payload: dict) -> Entity:
        if not isinstance(payload, dict):
            raise ValidationError(
                "entity must be a JSON object",
                details={"entity": f"expected object, got {type(payload).__name__}"},
            )
        return cls(
            id=str(payload.get("id") or ""),
            name=text_field(payload, "name", "entity"),
            type=text_field(payload, "type", "entity"),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "type": self.type}
