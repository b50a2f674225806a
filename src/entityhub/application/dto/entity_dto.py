"""Registry DTOs."""

from dataclasses import dataclass, field
from typing import Any

from entityhub.domain.entities import Entity


@dataclass
class EntityCreateInput:
    """Input for creating an entity."""

    display_name: str
    active: bool = True
    extra: dict[str, Any] = field(default_factory=dict)  # kind-specific fields


@dataclass
class EntityPatch:
    """Partial update - only fields that are not None are changed."""

    display_name: str | None = None
    active: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def changes(self) -> dict[str, Any]:
        """Column -> new value for every field present in the patch."""
        result: dict[str, Any] = {}
        if self.display_name is not None:
            result["display_name"] = self.display_name
        if self.active is not None:
            result["active"] = self.active
        result.update(self.extra)
        return result


@dataclass
class EntityFilters:
    """Listing filters within a type scope."""

    active: bool | None = None
    search: str | None = None


@dataclass
class MutationResult:
    """Outcome of a write: human-readable message plus the entity."""

    message: str
    data: Entity
