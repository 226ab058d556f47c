"""
Projects blueprint - completion rates and the dashboard search box.

Endpoints:
    POST /api/v1/projects/progress   - completion rate + card label per project
    POST /api/v1/projects/filter     - projects matching a filter, sorted by name

The filter endpoint supports limit/offset pagination on the query string.
"""

import logging
import math

from flask import Blueprint, jsonify

from dad.blueprints import filter_text, json_body, load_records, paginate_list
from dad.models.entity import Entity
from dad.models.project import Project
from dad.services.progress import calculate_progress, goal_message
from dad.services.project_filter import get_filtered_projects, parse_filter

logger = logging.getLogger(__name__)

projects_bp = Blueprint("projects", __name__, url_prefix="/api/v1/projects")


@projects_bp.route("/progress", methods=["POST"])
def projects_progress():
    """Completion rate of each project; ``progress`` is null when no goal is set."""
    projects = load_records(json_body(), "projects", Project)

    result = []
    for project in projects:
        progress = calculate_progress(project)
        result.append({
            "id": project.id,
            "progress": None if math.isnan(progress) else progress,
            "goalMessage": goal_message(project),
        })
    return jsonify(result)


@projects_bp.route("/filter", methods=["POST"])
def filter_projects():
    """Apply the search-box grammar to ``projects``.

    Body:
        projects: list (or id-keyed object) of projects
        entities: list (or id-keyed object) of business units / service centers
        filter:   raw search text
    """
    payload = json_body()
    projects = load_records(payload, "projects", Project)
    entities = load_records(payload, "entities", Entity, required=False)
    filter_value = filter_text(payload)

    query = parse_filter(filter_value)
    matched = get_filtered_projects(projects, entities, filter_value)
    page, total = paginate_list(matched)

    logger.info(
        "Project filter: %d/%d matched", total, len(projects),
        extra={"filter_kind": query.kind},
    )
    return jsonify({
        "query": query.to_dict(),
        "total": total,
        "projects": [project.to_dict() for project in page],
    })
