"""Pytest fixtures for entityhub tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import datetime
from enum import StrEnum
from types import SimpleNamespace
from typing import Any
from uuid import UUID

import pytest

from entityhub.application.use_cases.registry import ICON_KIND, ROLE_KIND, EntityRegistry
from entityhub.domain.entities import Entity
from entityhub.domain.value_objects import ActorContext
from entityhub.infrastructure.persistence.postgres.conflict_translator import (
    PostgresConflictTranslator,
)


# --- Fake store errors ---


class FakeUniqueViolation(Exception):
    """Looks like psycopg.errors.UniqueViolation to the conflict translator."""

    sqlstate = "23505"

    def __init__(self, fields: str, values: str) -> None:
        detail = f"Key ({fields})=({values}) already exists."
        super().__init__(f"duplicate key value violates unique constraint\nDETAIL:  {detail}")
        self.diag = SimpleNamespace(message_detail=detail)


class FakeStoreFailure(Exception):
    """Store failure that is not a unique violation."""

    sqlstate = "08006"


# --- Fake repositories ---


class FakeEntityRepository:
    """In-memory entity repository with unique (type, slug) and (type, lower(display_name)) indexes."""

    def __init__(self, patchable: tuple[str, ...] = ("display_name", "active")) -> None:
        self._by_id: dict[UUID, Entity] = {}
        self._patchable = frozenset(patchable)
        self.fail_with: Exception | None = None
        # slugs hidden from list_slugs, simulating a concurrent insert
        self.phantom_slugs: set[str] = set()

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _in_scope(self, entity_id: UUID, entity_type: StrEnum) -> Entity | None:
        entity = self._by_id.get(entity_id)
        if entity is None or entity.type != entity_type:
            return None
        return entity

    async def list_slugs(self, entity_type: StrEnum, base: str) -> set[str]:
        self._check_failure()
        return {
            e.slug
            for e in self._by_id.values()
            if e.type == entity_type
            and (e.slug == base or e.slug.startswith(f"{base}-"))
            and e.slug not in self.phantom_slugs
        }

    def _check_unique(self, entity: Entity) -> None:
        for e in self._by_id.values():
            if e.id == entity.id or e.type != entity.type:
                continue
            if e.slug == entity.slug:
                raise FakeUniqueViolation("type, slug", f"{entity.type.value}, {entity.slug}")
            if e.display_name.lower() == entity.display_name.lower():
                raise FakeUniqueViolation(
                    "type, lower(display_name::text)",
                    f"{entity.type.value}, {entity.display_name.lower()}",
                )

    async def create(self, entity: Entity) -> Entity:
        self._check_failure()
        self._check_unique(entity)
        self._by_id[entity.id] = entity
        return entity

    async def list(
        self,
        entity_type: StrEnum,
        *,
        active: bool | None = None,
        search: str | None = None,
    ) -> list[Entity]:
        self._check_failure()
        items = [
            e
            for e in self._by_id.values()
            if e.type == entity_type
            and (active is None or e.active == active)
            and (not search or search.casefold() in e.display_name.casefold())
        ]
        items.sort(key=lambda e: (e.display_name, e.id))
        return items

    async def get_by_id(self, entity_id: UUID, entity_type: StrEnum) -> Entity | None:
        self._check_failure()
        return self._in_scope(entity_id, entity_type)

    async def update(
        self,
        entity_id: UUID,
        entity_type: StrEnum,
        changes: dict[str, Any],
        updated_by: str,
        updated_at: datetime,
    ) -> Entity | None:
        self._check_failure()
        unknown = set(changes) - self._patchable
        if unknown:
            raise ValueError(f"Columns not patchable: {sorted(unknown)}")
        entity = self._in_scope(entity_id, entity_type)
        if entity is None:
            return None
        updated = replace(entity, **changes, updated_by=updated_by, updated_at=updated_at)
        self._check_unique(updated)
        self._by_id[entity_id] = updated
        return updated

    async def delete(self, entity_id: UUID, entity_type: StrEnum) -> Entity | None:
        self._check_failure()
        entity = self._in_scope(entity_id, entity_type)
        if entity is None:
            return None
        return self._by_id.pop(entity_id)

    def add(self, entity: Entity) -> None:
        """Helper to seed entities for tests."""
        self._by_id[entity.id] = entity

    def all(self) -> list[Entity]:
        return list(self._by_id.values())


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.icons = FakeEntityRepository()
        self.roles = FakeEntityRepository(patchable=("display_name", "active", "description"))

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over ``fake_uow``."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def actor() -> ActorContext:
    return ActorContext(actor_id="user-1", username="alice")


@pytest.fixture
def icon_registry(uow_factory) -> EntityRegistry:
    return EntityRegistry(ICON_KIND, uow_factory, PostgresConflictTranslator())


@pytest.fixture
def role_registry(uow_factory) -> EntityRegistry:
    return EntityRegistry(ROLE_KIND, uow_factory, PostgresConflictTranslator())
