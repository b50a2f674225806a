"""Domain entities."""

from entityhub.domain.entities.entity import Entity
from entityhub.domain.entities.icon import Icon
from entityhub.domain.entities.role import Role

__all__ = [
    "Entity",
    "Icon",
    "Role",
]
