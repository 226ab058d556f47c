"""
Shared pytest fixtures for the D.A.D maturity engine test suite.

Provides:
    - app: Flask application (session-scoped)
    - client: Flask test client (function-scoped)
    - entities / services / indicators: a small reference catalog
    - make_project: factory building Project records from wire dicts
"""

import pytest

from dad import create_app
from dad.models.entity import BUSINESS_UNIT, SERVICE_CENTER, Entity
from dad.models.indicator import FunctionalService, Indicator
from dad.models.project import Project


# ── App fixtures ─────────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    return application


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Domain fixtures ──────────────────────────────────────────────────────


@pytest.fixture()
def entities():
    return [
        Entity(id="bu-1", name="Défense", type=BUSINESS_UNIT),
        Entity(id="bu-2", name="Aerospace", type=BUSINESS_UNIT),
        Entity(id="sc-1", name="Bordeaux", type=SERVICE_CENTER),
    ]


@pytest.fixture()
def services():
    return [
        FunctionalService(id="ci", name="Continuous Integration", package="Build",
                          services=["jenkins", "gitlabci", "tfs"]),
        FunctionalService(id="scm", name="Source Control", package="Build",
                          services=["gitlab"]),
        FunctionalService(id="wiki", name="Wiki", package="Collaborate",
                          services=["confluence"]),
    ]


@pytest.fixture()
def indicators():
    return [
        Indicator(service="jenkins", status="Undetermined", docktor_group="alpha", id="i1"),
        Indicator(service="gitlab", status="Active", docktor_group="alpha", id="i2"),
    ]


@pytest.fixture()
def make_project():
    """Build a Project from keyword overrides using the wire (camelCase) shape."""

    def _make(project_id="p1", name="Project", matrix=None, **fields):
        payload = {"id": project_id, "name": name, "matrix": matrix or []}
        payload.update(fields)
        return Project.from_dict(payload)

    return _make
