"""Base entity for registry-managed records."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


@dataclass
class Entity:
    """Named entity with a slug unique within its type scope.

    ``slug`` and ``type`` are fixed at creation. ``active`` is a soft
    lifecycle flag; removal is a hard delete.
    """

    id: UUID
    display_name: str
    slug: str
    type: StrEnum
    active: bool
    created_at: datetime
    updated_at: datetime
    created_by: str | None = None
    updated_by: str | None = None
