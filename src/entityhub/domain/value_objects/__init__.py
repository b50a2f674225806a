"""Domain value objects."""

from entityhub.domain.value_objects.actor_context import ActorContext
from entityhub.domain.value_objects.entity_type import (
    IconType,
    RoleType,
    parse_entity_type,
)

__all__ = [
    "ActorContext",
    "IconType",
    "RoleType",
    "parse_entity_type",
]
