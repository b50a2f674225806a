"""Generic entity registry use cases."""

from entityhub.application.use_cases.registry.entity_kind import (
    ICON_KIND,
    ROLE_KIND,
    EntityKind,
)
from entityhub.application.use_cases.registry.entity_registry import EntityRegistry

__all__ = [
    "ICON_KIND",
    "ROLE_KIND",
    "EntityKind",
    "EntityRegistry",
]
