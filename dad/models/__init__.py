"""
Record types exchanged with the D.A.D backend.

Each record decodes the backend's camelCase JSON with ``from_dict`` and
encodes it back with ``to_dict``.
"""

from dad.models.entity import Entity
from dad.models.indicator import FunctionalService, Indicator
from dad.models.option import Option
from dad.models.project import MatrixEntry, Project
from dad.models.user import Role, User

__all__ = [
    "Entity",
    "FunctionalService",
    "Indicator",
    "MatrixEntry",
    "Option",
    "Project",
    "Role",
    "User",
]
