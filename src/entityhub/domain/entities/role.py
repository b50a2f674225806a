"""Role entity."""

from dataclasses import dataclass

from entityhub.domain.entities.entity import Entity
from entityhub.domain.value_objects import RoleType


@dataclass
class Role(Entity):
    """Role - named role scoped by its role type."""

    type: RoleType
    description: str | None = None
