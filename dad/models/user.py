"""Users and their global roles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dad.core.exceptions import ValidationError
from dad.utils.helpers import text_field


class Role(str, Enum):
    ADMIN = "admin"
    RI = "ri"            # supervisor: sees projects of their entities
    PM = "pm"
    DEPUTY = "deputy"    # same rights as the project manager

    @property
    def is_admin(self) -> bool:
        return self is Role.ADMIN

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]

    @classmethod
    def parse(cls, value: str | None) -> Role | None:
        """Return the Role for ``value``, or None if it is not a known role."""
        try:
            return cls(value)
        except ValueError:
            return None


_ROLE_LABELS = {
    Role.ADMIN: "Admin",
    Role.RI: "Supervisor",
    Role.PM: "Project Manager",
    Role.DEPUTY: "Deputy",
}

DEFAULT_ROLE = Role.PM


@dataclass(frozen=True)
class User:
    id: str
    username: str = ""
    display_name: str = ""
    role: Role = DEFAULT_ROLE

    @classmethod
    def from_dict(cls, payload: dict) -> User:
        if not isinstance(payload, dict):
            raise ValidationError(
                "user must be a JSON object",
                details={"user": f"expected object, got {type(payload).__name__}"},
            )
        return cls(
            id=str(payload.get("id") or ""),
            username=text_field(payload, "username", "user"),
            display_name=text_field(payload, "displayName", "user"),
            role=Role.parse(payload.get("role")) or DEFAULT_ROLE,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "displayName": self.display_name,
            "role": self.role.value,
        }
