"""
Option catalogs - progress/goal levels, statuses, priorities, deployment.

Catalogs are module-level tuples of frozen ``Option`` records. Nothing in
the codebase mutates them; code that needs a variant (e.g. the admin-lock
policy) builds new Option instances with ``dataclasses.replace``.

Usage:
    from dad.services.options import PROGRESS_OPTIONS, find_status
    find_status("Active")          # -> Option(value=3, text="Active", ...)
    level_text(3)                  # -> "60%"
"""

from __future__ import annotations

from dad.core.exceptions import NotFoundError
from dad.models.option import Option


def _label(color: str) -> dict:
    return {"color": color, "empty": True, "circular": False}


# ═════════════════════════════════════════════════════════════════════════════
# Progress / goal levels - ordered, value -1 is "not applicable"
# ═════════════════════════════════════════════════════════════════════════════

PROGRESS_OPTIONS: tuple[Option, ...] = (
    Option(-1, "N/A", "Not applicable", label=_label("black")),
    Option(0, "0%", "No action launched on the service", label=_label("grey")),
    Option(1, "20%", "Deployed empty by CDK core team", label=_label("red")),
    Option(2, "40%", "Configured by project team and ready to use", label=_label("orange")),
    Option(3, "60%", "Used by leaders or seniors", label=_label("yellow")),
    Option(4, "80%", "Team trained and aware of the benefits", label=_label("olive")),
    Option(5, "100%", "Fully used by the team", label=_label("green")),
)


# ═════════════════════════════════════════════════════════════════════════════
# Technical-service health - ordered from least to most healthy
# ═════════════════════════════════════════════════════════════════════════════

STATUS_OPTIONS: tuple[Option, ...] = (
    Option(0, "Empty", "The service was never used by the project", color="black"),
    Option(1, "Undetermined", "We cannot determine if the service is active or not", color="red"),
    Option(2, "Inactive", "The service has not been active recently", color="orange"),
    Option(3, "Active", "The service has been recently active", color="green"),
)


# ═════════════════════════════════════════════════════════════════════════════
# Priorities and deployment state
# ═════════════════════════════════════════════════════════════════════════════

PRIORITY_OPTIONS: tuple[Option, ...] = (
    Option("N/A", "N/A", "Not applicable"),
    Option("P0", "P0", "High priority"),
    Option("P1", "P1", "Medium priority"),
    Option("P2", "P2", "Low priority"),
)

DEPLOYED_OPTIONS: tuple[Option, ...] = (
    Option("no", "No", "The service is not deployed"),
    Option("yes", "Yes", "The service has been deployed"),
)

CATALOGS: dict[str, tuple[Option, ...]] = {
    "progress": PROGRESS_OPTIONS,
    "status": STATUS_OPTIONS,
    "priorities": PRIORITY_OPTIONS,
    "deployed": DEPLOYED_OPTIONS,
}


# ═════════════════════════════════════════════════════════════════════════════
# Lookups
# ═════════════════════════════════════════════════════════════════════════════

def get_catalog(name: str) -> tuple[Option, ...]:
    """Return the catalog registered under ``name`` or raise NotFoundError."""
    try:
        return CATALOGS[name]
    except KeyError:
        raise NotFoundError(resource="Catalog", resource_id=name) from None


def find_status(text: str | None, catalog=STATUS_OPTIONS) -> Option | None:
    """Resolve a free-text indicator status by exact text match."""
    for option in catalog:
        if option.text == text:
            return option
    return None


def find_option(value, catalog) -> Option | None:
    for option in catalog:
        if option.value == value:
            return option
    return None


def level_text(level: int | None) -> str:
    """Display text of a progress/goal level; unset or unknown → "N/A"."""
    option = find_option(-1 if level is None else level, PROGRESS_OPTIONS)
    return option.text if option else "N/A"
