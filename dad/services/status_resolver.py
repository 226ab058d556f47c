"""
Status of a functional service, rolled up from technical-service indicators.

A functional service (e.g. "Continuous integration pipeline") is backed by
several technical services (jenkins, gitlabci, tfs). Each project group
reports one indicator per technical service it uses; the matrix shows a
single status for the functional service.

Usage:
    from dad.services.status_resolver import get_service_status
    status = get_service_status(service, indicators)   # Option | None
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from dad.models.indicator import FunctionalService, Indicator
from dad.models.option import Option
from dad.services.options import STATUS_OPTIONS, find_status

logger = logging.getLogger(__name__)


def _iter_indicators(indicators) -> Iterable[Indicator]:
    if indicators is None:
        return ()
    if isinstance(indicators, Mapping):
        return indicators.values()
    return indicators


def indicators_by_service(
    functional_service: FunctionalService,
    indicators,
) -> dict[str, list[Indicator]]:
    """Map each member technical service to the indicators reporting on it.

    Members without any indicator are left out. Indicators for services that
    are not members are ignored.
    """
    members = functional_service.services or []
    by_service: dict[str, list[Indicator]] = {}
    all_indicators = list(_iter_indicators(indicators))
    for key in members:
        matches = [ind for ind in all_indicators if ind.service == key]
        if matches:
            by_service[key] = matches
    return by_service


def pick_status(current: Option | None, new: Option | None) -> Option | None:
    """Combine two candidate statuses.

    Both set and ``current`` ranks higher: keep ``current``.
    Only ``current`` set: keep ``current``.
    Anything else: take ``new``.
    """
    if current is not None and new is not None and current.value > new.value:
        return current
    if current is not None and new is None:
        return current
    return new


def get_service_status(
    functional_service: FunctionalService,
    indicators,
    catalog: tuple[Option, ...] = STATUS_OPTIONS,
) -> Option | None:
    """Return the status Option to display for ``functional_service``.

    None when the service has no member list, when no indicator reports on
    any member, or when none of the matching statuses is in the catalog.
    """
    if functional_service.services is None:
        return None

    matching = [
        indicator
        for matches in indicators_by_service(functional_service, indicators).values()
        for indicator in matches
    ]

    status: Option | None = None
    for indicator in matching:
        resolved = find_status(indicator.status, catalog)
        if resolved is None:
            logger.debug(
                "Unknown status %r for %s in group %s",
                indicator.status, indicator.service, indicator.docktor_group,
            )
        status = pick_status(status, resolved)
    return status
