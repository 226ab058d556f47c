"""Option - one selectable entry of a catalog (progress level, status, ...)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Option:
    """Immutable catalog entry.

    ``value`` is the key stored on matrix entries (or matched against, for
    statuses); ``text`` is the short label and ``title`` the tooltip.
    ``disabled`` is never stored: the admin-lock policy returns copies with
    it set.
    """

    value: int | str
    text: str
    title: str
    color: str | None = None
    label: dict[str, Any] | None = field(default=None, compare=False, hash=False)
    disabled: bool = False

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "value": self.value,
            "text": self.text,
            "title": self.title,
        }
        if self.color is not None:
            data["color"] = self.color
        if self.label is not None:
            data["label"] = dict(self.label)
        if self.disabled:
            data["disabled"] = True
        return data
