"""Entity registry - create/list/get/update/toggle/delete for any entity kind."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4

from entityhub.application.dto import (
    EntityCreateInput,
    EntityFilters,
    EntityPatch,
    MutationResult,
)
from entityhub.application.ports import ConflictTranslator, UnitOfWorkFactory
from entityhub.application.use_cases.registry.entity_kind import EntityKind
from entityhub.domain.entities import Entity
from entityhub.domain.exceptions import (
    EntityHubError,
    InternalError,
    NotFound,
    ValidationError,
)
from entityhub.domain.services import base_slug, generate_slug
from entityhub.domain.value_objects import ActorContext

logger = logging.getLogger(__name__)


class EntityRegistry:
    """Typed, actor-scoped registry for one entity kind.

    Every operation runs in its own unit of work and is limited to the given
    ``entity_type`` scope. Store-level unique violations become ``Conflict``;
    any other store failure is logged and raised as ``InternalError``.
    """

    def __init__(
        self,
        kind: EntityKind,
        unit_of_work_factory: UnitOfWorkFactory,
        conflict_translator: ConflictTranslator,
    ) -> None:
        self._kind = kind
        self._uow_factory = unit_of_work_factory
        self._conflict_translator = conflict_translator

    @property
    def kind(self) -> EntityKind:
        return self._kind

    async def create(
        self,
        data: EntityCreateInput,
        actor: ActorContext,
        entity_type: StrEnum,
    ) -> MutationResult:
        """Create entity with a slug unique within ``entity_type``."""
        self._check_type(entity_type)
        display_name = self._clean_display_name(data.display_name)
        extra = self._clean_extra(data.extra)
        logger.info(
            "Adding new %s (type=%s, actor=%s)",
            self._kind.key, entity_type, actor.actor_id,
        )

        async with self._storage_errors(f"creating a new {self._kind.key}"):
            async with self._uow_factory() as uow:
                repo = self._kind.repository(uow)
                existing = await repo.list_slugs(
                    entity_type, base_slug(display_name, entity_type.value)
                )
                now = datetime.now(UTC)
                entity = self._kind.entity_cls(
                    id=uuid4(),
                    display_name=display_name,
                    slug=generate_slug(display_name, existing, entity_type.value),
                    type=entity_type,
                    active=data.active,
                    created_at=now,
                    updated_at=now,
                    created_by=actor.actor_id,
                    updated_by=actor.actor_id,
                    **extra,
                )
                created = await repo.create(entity)

        return MutationResult(
            message=f"{self._kind.label} {created.display_name} was successfully created",
            data=created,
        )

    async def find_all(
        self,
        filters: EntityFilters,
        actor: ActorContext,
        entity_type: StrEnum,
    ) -> list[Entity]:
        """List entities of ``entity_type`` ordered by display name."""
        self._check_type(entity_type)
        search = (filters.search or "").strip() or None
        async with self._storage_errors(f"listing {self._kind.key}s"):
            async with self._uow_factory() as uow:
                return await self._kind.repository(uow).list(
                    entity_type, active=filters.active, search=search
                )

    async def find_one(
        self,
        entity_id: UUID,
        actor: ActorContext,
        entity_type: StrEnum,
    ) -> Entity:
        """Get entity by id within ``entity_type``."""
        self._check_type(entity_type)
        async with self._storage_errors(f"reading {self._kind.key} {entity_id}"):
            async with self._uow_factory() as uow:
                entity = await self._kind.repository(uow).get_by_id(entity_id, entity_type)

        if entity is None:
            logger.warning(
                "Actor %s is trying to access %s %s not in the database",
                actor.actor_id, self._kind.key, entity_id,
            )
            raise NotFound(self._kind.label, str(entity_id))
        return entity

    async def update(
        self,
        entity_id: UUID,
        patch: EntityPatch,
        actor: ActorContext,
        entity_type: StrEnum,
    ) -> MutationResult:
        """Merge the fields present in ``patch``. Slug and type never change."""
        self._check_type(entity_type)
        changes = patch.changes()
        if not changes:
            raise ValidationError("Update must contain at least one field")
        if "display_name" in changes:
            changes["display_name"] = self._clean_display_name(changes["display_name"])
        self._clean_extra(patch.extra)

        async with self._storage_errors(f"updating {self._kind.key} {entity_id}"):
            async with self._uow_factory() as uow:
                updated = await self._kind.repository(uow).update(
                    entity_id,
                    entity_type,
                    changes,
                    updated_by=actor.actor_id,
                    updated_at=datetime.now(UTC),
                )

        if updated is None:
            logger.warning("Error while updating %s with %s", self._kind.key, entity_id)
            raise NotFound(self._kind.label, str(entity_id))

        message = f"{self._kind.label} with {entity_id} was successfully updated"
        logger.info("%s (actor=%s)", message, actor.actor_id)
        return MutationResult(message=message, data=updated)

    async def toggle_status(
        self,
        entity_id: UUID,
        active: bool,
        actor: ActorContext,
        entity_type: StrEnum,
    ) -> MutationResult:
        """Set the ``active`` flag. Setting the current value again succeeds."""
        return await self.update(entity_id, EntityPatch(active=active), actor, entity_type)

    async def remove(
        self,
        entity_id: UUID,
        actor: ActorContext,
        entity_type: StrEnum,
    ) -> MutationResult:
        """Hard delete entity."""
        self._check_type(entity_type)
        async with self._storage_errors(f"deleting {self._kind.key} {entity_id}"):
            async with self._uow_factory() as uow:
                deleted = await self._kind.repository(uow).delete(entity_id, entity_type)

        if deleted is None:
            logger.warning("Error while deleting %s with %s", self._kind.key, entity_id)
            raise NotFound(self._kind.label, str(entity_id))

        message = f"{self._kind.label} with {entity_id} was successfully deleted"
        logger.info("%s (actor=%s)", message, actor.actor_id)
        return MutationResult(message=message, data=deleted)

    def _check_type(self, entity_type: StrEnum) -> None:
        if not isinstance(entity_type, self._kind.type_enum):
            raise ValidationError(
                f"Invalid {self._kind.key} type '{entity_type}'"
            )

    def _clean_display_name(self, display_name: str) -> str:
        cleaned = (display_name or "").strip()
        if not cleaned:
            raise ValidationError("display_name must not be empty")
        return cleaned

    def _clean_extra(self, extra: dict) -> dict:
        unknown = set(extra) - set(self._kind.extra_fields)
        if unknown:
            raise ValidationError(
                f"Unknown {self._kind.key} field(s): {', '.join(sorted(unknown))}"
            )
        return dict(extra)

    @asynccontextmanager
    async def _storage_errors(self, action: str) -> AsyncIterator[None]:
        """Rewrite store failures raised inside the block into domain errors."""
        try:
            yield
        except EntityHubError:
            raise
        except Exception as exc:
            conflict = self._conflict_translator.translate(exc, self._kind.label)
            if conflict is not None:
                logger.warning("Conflict while %s: %s", action, conflict)
                raise conflict from exc
            logger.exception("Error while %s", action)
            raise InternalError(
                f"Something unexpected happened while {action}"
            ) from exc
