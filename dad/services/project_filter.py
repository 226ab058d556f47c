"""
Project search - free-text filter grammar over the project list.

Grammar, checked in this order:
    ""                    → every project
    "started"             → any goal or any progress recorded
    "no goal"             → progress recorded but no goal
    "not started"         → neither goal nor progress
    "<N>%"                → floor(completion rate) >= N
    anything else         → plain text

Keywords only match the whole filter, case-sensitively. Whatever the
query kind, a project also matches when the filter text occurs in its
name/domain or in the name of its business unit or service center.

Usage:
    from dad.services.project_filter import get_filtered_projects
    get_filtered_projects(projects, entities, "50%")
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from dad.models.entity import Entity
from dad.models.indicator import Indicator
from dad.models.project import Project
from dad.services.progress import calculate_progress, has_goal, has_progress
from dad.utils.helpers import as_list
from dad.utils.strings import contains_without_accents

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════════
# Query variants
# ═════════════════════════════════════════════════════════════════════════════

class Keyword(str, Enum):
    STARTED = "started"
    NO_GOAL = "no goal"
    NOT_STARTED = "not started"


@dataclass(frozen=True)
class EmptyQuery:
    kind = "empty"
    text: str = ""

    def to_dict(self) -> dict:
        return {"kind": self.kind}


@dataclass(frozen=True)
class KeywordQuery:
    keyword: Keyword
    kind = "keyword"

    @property
    def text(self) -> str:
        return self.keyword.value

    def to_dict(self) -> dict:
        return {"kind": self.kind, "keyword": self.keyword.value}


@dataclass(frozen=True)
class PercentageQuery:
    threshold: int
    text: str
    kind = "percentage"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "threshold": self.threshold}


@dataclass(frozen=True)
class TextQuery:
    text: str
    kind = "text"

    def to_dict(self) -> dict:
        return {"kind": self.kind, "text": self.text}


FilterQuery = EmptyQuery | KeywordQuery | PercentageQuery | TextQuery

# Like JavaScript's parseInt: leading blanks, optional sign, digits; the
# remainder is ignored.
_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_percentage(prefix: str) -> int | None:
    match = _LEADING_INT.match(prefix)
    return int(match.group(1)) if match else None


def parse_filter(filter_value: str | None) -> FilterQuery:
    """Classify a raw filter string into one of the query variants."""
    if not filter_value:
        return EmptyQuery()
    try:
        return KeywordQuery(Keyword(filter_value))
    except ValueError:
        pass
    if filter_value.endswith("%"):
        threshold = parse_percentage(filter_value[:-1])
        if threshold is not None:
            return PercentageQuery(threshold=threshold, text=filter_value)
    return TextQuery(filter_value)


# ═════════════════════════════════════════════════════════════════════════════
# Predicates
# ═════════════════════════════════════════════════════════════════════════════

def _entity_name(entities: Mapping[str, Entity], entity_id: str) -> str:
    entity = entities.get(entity_id) if entity_id else None
    return entity.name if entity else ""


def _matches_text(project: Project, entities: Mapping[str, Entity], text: str) -> bool:
    # compact separators and raw unicode, as the browser's JSON.stringify
    serialized = json.dumps([project.name, project.domain], ensure_ascii=False, separators=(",", ":"))
    if contains_without_accents(serialized, text):
        return True
    return (
        contains_without_accents(_entity_name(entities, project.business_unit), text)
        or contains_without_accents(_entity_name(entities, project.service_center), text)
    )


def _matches_keyword(project: Project, keyword: Keyword) -> bool:
    if keyword is Keyword.STARTED:
        progress = calculate_progress(project)
        started = not math.isnan(progress) and math.floor(progress) >= 0
        return started or has_progress(project)
    if keyword is Keyword.NO_GOAL:
        return not has_goal(project) and has_progress(project)
    if keyword is Keyword.NOT_STARTED:
        return not has_goal(project) and not has_progress(project)
    return False


def _matches_percentage(project: Project, threshold: int) -> bool:
    progress = calculate_progress(project)
    if math.isnan(progress):
        return False
    return math.floor(progress) >= threshold


def matches(project: Project, entities: Mapping[str, Entity], query: FilterQuery) -> bool:
    """True if ``project`` satisfies ``query``."""
    if isinstance(query, EmptyQuery):
        return True
    if _matches_text(project, entities, query.text):
        return True
    if isinstance(query, KeywordQuery):
        return _matches_keyword(project, query.keyword)
    if isinstance(query, PercentageQuery):
        return _matches_percentage(project, query.threshold)
    return False


# ═════════════════════════════════════════════════════════════════════════════
# Entry points
# ═════════════════════════════════════════════════════════════════════════════

def _entities_by_id(entities) -> dict[str, Entity]:
    if isinstance(entities, Mapping):
        return dict(entities)
    return {entity.id: entity for entity in as_list(entities)}


def sort_by_name(projects) -> list[Project]:
    """New list sorted by name, case-sensitive; ties keep input order."""
    return sorted(as_list(projects), key=lambda project: project.name or "")


def get_filtered_projects(projects, entities, filter_value: str | None) -> list[Project]:
    """Return the projects matching ``filter_value``, sorted by name.

    ``projects`` and ``entities`` may be lists or id-keyed mappings. A
    project whose entity ids are unknown simply has no organization name
    to match.
    """
    query = parse_filter(filter_value)
    ordered = sort_by_name(projects)
    if isinstance(query, EmptyQuery):
        return ordered

    lookup = _entities_by_id(entities)
    result = [project for project in ordered if matches(project, lookup, query)]
    logger.debug(
        "Project filter %r (%s): %d/%d matched",
        filter_value, query.kind, len(result), len(ordered),
    )
    return result


def get_filtered_indicators(indicators, filter_value: str | None) -> list[Indicator]:
    """Indicators whose values contain ``filter_value`` (accent/case-insensitive)."""
    items = as_list(indicators)
    if not filter_value:
        return items
    return [
        indicator
        for indicator in items
        if contains_without_accents(
            json.dumps(list(indicator.to_dict().values()), ensure_ascii=False, separators=(",", ":")),
            filter_value,
        )
    ]
