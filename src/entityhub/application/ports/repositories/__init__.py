"""Repository ports."""

from entityhub.application.ports.repositories.entity_repository import (
    EntityRepository,
)

__all__ = [
    "EntityRepository",
]
