"""
Exception hierarchy shared by the models, services and blueprints.

The pure services never raise: degraded input resolves to ``None``,
``""`` or ``nan``. These exceptions are raised where a request payload is
decoded into records, and the app factory maps them to JSON responses once.

Usage:
    from dad.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Catalog", resource_id="levels")
    raise ValidationError("projects is required", details={"projects": "required"})
"""


class NotFoundError(Exception):
    """Raised when a named resource (e.g. an option catalog) does not exist.

    Maps to HTTP 404.

    Args:
        resource: Human-readable name of what was looked up (e.g. "Catalog").
        resource_id: The key that was looked up.
    """

    def __init__(self, resource: str, resource_id: int | str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when a payload cannot be decoded into domain records.

    Maps to HTTP 400.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown for structured API responses.
                 Keys are field names; values are error descriptions.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)
