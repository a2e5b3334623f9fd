"""
Error types raised by the Products service layer.

The HTTP layer maps them to status codes: NotFoundError -> 404,
ValidationError -> 400.
"""


class ServiceError(Exception):
    """Base class for deliberate service-layer failures."""


class NotFoundError(ServiceError):
    """The requested entity does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class ValidationError(ServiceError):
    """Proposed field values break a business rule."""
