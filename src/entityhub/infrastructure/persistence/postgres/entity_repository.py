"""PostgreSQL entity repository implementation."""

from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from psycopg import AsyncConnection, sql

from entityhub.domain.entities import Entity

BASE_COLUMNS = (
    "id",
    "display_name",
    "slug",
    "type",
    "active",
    "created_by",
    "updated_by",
    "created_at",
    "updated_at",
)
PATCHABLE_COLUMNS = ("display_name", "active")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresEntityRepository:
    """Entity repository over one table with unique (type, slug) and (type, name) indexes."""

    def __init__(
        self,
        conn: AsyncConnection,
        table: str,
        entity_cls: type[Entity],
        type_enum: type[StrEnum],
        extra_columns: tuple[str, ...] = (),
    ) -> None:
        self._conn = conn
        self._table = sql.Identifier(table)
        self._entity_cls = entity_cls
        self._type_enum = type_enum
        self._columns = BASE_COLUMNS + extra_columns
        self._patchable = frozenset(PATCHABLE_COLUMNS + extra_columns)
        self._select_list = sql.SQL(", ").join(map(sql.Identifier, self._columns))

    def _to_entity(self, row: tuple) -> Entity:
        values = dict(zip(self._columns, row, strict=True))
        values["type"] = self._type_enum(values["type"])
        return self._entity_cls(**values)

    async def list_slugs(self, entity_type: StrEnum, base: str) -> set[str]:
        """Slugs in scope equal to ``base`` or starting with ``base-``."""
        q = sql.SQL(
            "SELECT slug FROM {table} WHERE type = %s AND (slug = %s OR slug LIKE %s)"
        ).format(table=self._table)
        cur = await self._conn.execute(
            q, (entity_type.value, base, _escape_like(base) + "-%")
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def create(self, entity: Entity) -> Entity:
        """Insert entity. Raises UniqueViolation on a (type, slug) or (type, name) clash."""
        values = [getattr(entity, c) for c in self._columns]
        values[self._columns.index("type")] = entity.type.value
        q = sql.SQL("INSERT INTO {table} ({cols}) VALUES ({params})").format(
            table=self._table,
            cols=self._select_list,
            params=sql.SQL(", ").join(sql.Placeholder() * len(self._columns)),
        )
        await self._conn.execute(q, values)
        return entity

    async def list(
        self,
        entity_type: StrEnum,
        *,
        active: bool | None = None,
        search: str | None = None,
    ) -> list[Entity]:
        """List entities in scope ordered by display name."""
        conditions = [sql.SQL("type = %s")]
        params: list[object] = [entity_type.value]
        if active is not None:
            conditions.append(sql.SQL("active = %s"))
            params.append(active)
        if search:
            conditions.append(sql.SQL("display_name ILIKE %s"))
            params.append(f"%{_escape_like(search)}%")
        q = sql.SQL(
            "SELECT {cols} FROM {table} WHERE {where} ORDER BY display_name, id"
        ).format(
            cols=self._select_list,
            table=self._table,
            where=sql.SQL(" AND ").join(conditions),
        )
        cur = await self._conn.execute(q, params)
        rows = await cur.fetchall()
        return [self._to_entity(r) for r in rows]

    async def get_by_id(self, entity_id: UUID, entity_type: StrEnum) -> Entity | None:
        """Get entity by id within scope."""
        q = sql.SQL("SELECT {cols} FROM {table} WHERE id = %s AND type = %s").format(
            cols=self._select_list, table=self._table
        )
        cur = await self._conn.execute(q, (entity_id, entity_type.value))
        r = await cur.fetchone()
        if not r:
            return None
        return self._to_entity(r)

    async def update(
        self,
        entity_id: UUID,
        entity_type: StrEnum,
        changes: dict[str, Any],
        updated_by: str,
        updated_at: datetime,
    ) -> Entity | None:
        """Apply ``changes`` and return the updated row, or None when absent."""
        unknown = set(changes) - self._patchable
        if unknown:
            raise ValueError(f"Columns not patchable: {sorted(unknown)}")

        assignments = [
            sql.SQL("{} = %s").format(sql.Identifier(c)) for c in changes
        ]
        assignments.append(sql.SQL("updated_by = %s"))
        assignments.append(sql.SQL("updated_at = %s"))
        q = sql.SQL(
            "UPDATE {table} SET {assignments} WHERE id = %s AND type = %s RETURNING {cols}"
        ).format(
            table=self._table,
            assignments=sql.SQL(", ").join(assignments),
            cols=self._select_list,
        )
        params = [*changes.values(), updated_by, updated_at, entity_id, entity_type.value]
        cur = await self._conn.execute(q, params)
        r = await cur.fetchone()
        if not r:
            return None
        return self._to_entity(r)

    async def delete(self, entity_id: UUID, entity_type: StrEnum) -> Entity | None:
        """Hard delete; returns the deleted row, or None when absent."""
        q = sql.SQL(
            "DELETE FROM {table} WHERE id = %s AND type = %s RETURNING {cols}"
        ).format(table=self._table, cols=self._select_list)
        cur = await self._conn.execute(q, (entity_id, entity_type.value))
        r = await cur.fetchone()
        if not r:
            return None
        return self._to_entity(r)
