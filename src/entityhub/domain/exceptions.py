"""Domain exceptions."""


class EntityHubError(Exception):
    """Base exception for entityhub."""

    pass


class ValidationError(EntityHubError):
    """Validation failed for input data."""

    pass


class NotFound(EntityHubError):
    """Requested entity does not exist in the caller's scope."""

    def __init__(self, label: str, entity_id: str) -> None:
        super().__init__(f"{label} with id {entity_id} not found")
        self.label = label
        self.entity_id = entity_id


class Conflict(EntityHubError):
    """Write would violate a uniqueness invariant."""

    pass


class InternalError(EntityHubError):
    """Unexpected storage failure. Message never carries storage details."""

    pass
