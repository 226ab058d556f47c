"""Project completion rate computed from the maturity matrix.

Pure functions with no external dependencies.
"""

from __future__ import annotations

import math

from dad.models.project import Project


def calculate_progress(project: Project) -> float:
    """Mean goal completion (0-100) over the matrix lines that have a goal.

    Returns ``nan`` when no line has a goal: callers must special-case it
    rather than format it.

    An unset progress counts as 0 and a line never contributes more than
    100. A line whose goal is 0 contributes nothing but still counts in the
    denominator.
    """
    with_goal = [entry for entry in project.matrix if entry.goal is not None]
    if not with_goal:
        return math.nan

    total = 0.0
    for entry in with_goal:
        if entry.goal == 0:
            continue
        progress = entry.progress if entry.progress is not None else 0
        total += min(progress * 100 / entry.goal, 100)
    return total / len(with_goal)


def has_goal(project: Project) -> bool:
    return any(entry.goal is not None for entry in project.matrix)


def has_progress(project: Project) -> bool:
    return any(entry.progress is not None for entry in project.matrix)


def floor_progress(project: Project) -> int | None:
    """``floor(calculate_progress(project))``, or None when there is no goal."""
    value = calculate_progress(project)
    if math.isnan(value):
        return None
    return math.floor(value)


def goal_message(project: Project) -> str:
    """Label shown on a project card.

    "-" when nothing was filled in, "N/A" when there is progress but no
    goal, otherwise the floored completion rate ("55%").
    """
    if not has_goal(project):
        return "N/A" if has_progress(project) else "-"
    return f"{floor_progress(project)}%"
