"""Entity repository port."""

from datetime import datetime
from enum import StrEnum
from typing import Any, Protocol
from uuid import UUID

from entityhub.domain.entities import Entity


class EntityRepository(Protocol):
    """Port for type-scoped entity persistence.

    Every lookup is restricted to ``entity_type``. ``create`` must enforce the
    ``(type, slug)`` uniqueness atomically and raise the store's error on
    violation.
    """

    async def list_slugs(self, entity_type: StrEnum, base: str) -> set[str]: ...

    async def create(self, entity: Entity) -> Entity: ...

    async def list(
        self,
        entity_type: StrEnum,
        *,
        active: bool | None = None,
        search: str | None = None,
    ) -> list[Entity]: ...

    async def get_by_id(self, entity_id: UUID, entity_type: StrEnum) -> Entity | None: ...

    async def update(
        self,
        entity_id: UUID,
        entity_type: StrEnum,
        changes: dict[str, Any],
        updated_by: str,
        updated_at: datetime,
    ) -> Entity | None: ...

    async def delete(self, entity_id: UUID, entity_type: StrEnum) -> Entity | None: ...
