"""Functional-service catalog helpers (package grouping for matrix and export)."""

from __future__ import annotations

from dad.models.indicator import FunctionalService
from dad.utils.helpers import as_list


def group_by_package(services) -> dict[str, list[FunctionalService]]:
    """Group services by package; order inside a package follows the input."""
    grouped: dict[str, list[FunctionalService]] = {}
    for service in as_list(services):
        grouped.setdefault(service.package, []).append(service)
    return grouped


def sorted_packages(services) -> list[tuple[str, list[FunctionalService]]]:
    """``group_by_package`` as (package, services) pairs sorted by package name."""
    return sorted(group_by_package(services).items(), key=lambda item: item[0])
