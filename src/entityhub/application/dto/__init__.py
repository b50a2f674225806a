"""Application DTOs."""

from entityhub.application.dto.entity_dto import (
    EntityCreateInput,
    EntityFilters,
    EntityPatch,
    MutationResult,
)

__all__ = [
    "EntityCreateInput",
    "EntityFilters",
    "EntityPatch",
    "MutationResult",
]
