"""Entity API resources - one set of responders shared by icons and roles."""

from dataclasses import fields
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

import falcon.asgi

from entityhub.application.dto import (
    EntityCreateInput,
    EntityFilters,
    EntityPatch,
    MutationResult,
)
from entityhub.application.use_cases.registry import EntityRegistry
from entityhub.domain.entities import Entity
from entityhub.domain.exceptions import ValidationError
from entityhub.domain.value_objects import ActorContext, parse_entity_type


def serialize_entity(entity: Entity) -> dict[str, Any]:
    """Entity as JSON-ready dict."""
    data: dict[str, Any] = {}
    for f in fields(entity):
        value = getattr(entity, f.name)
        if isinstance(value, UUID):
            value = str(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, StrEnum):
            value = value.value
        data[f.name] = value
    return data


def serialize_result(result: MutationResult) -> dict[str, Any]:
    return {"message": result.message, "data": serialize_entity(result.data)}


class _RegistryResource:
    """Shared plumbing: actor lookup, type gate, id and body parsing."""

    def __init__(
        self,
        registry: EntityRegistry,
        fixed_type: StrEnum | None = None,
    ) -> None:
        self._registry = registry
        self._kind = registry.kind
        self._fixed_type = fixed_type

    def _actor(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> ActorContext | None:
        actor = getattr(req.context, "actor", None)
        if not actor:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
        return actor

    def _type(self, token: str | None) -> StrEnum:
        if self._fixed_type is not None:
            return self._fixed_type
        return parse_entity_type(token, self._kind.type_enum, f"{self._kind.key} type")

    def _id(self, entity_id: str) -> UUID:
        try:
            return UUID(entity_id)
        except ValueError:
            raise ValidationError(f"Invalid {self._kind.key} ID") from None

    async def _body(self, req: falcon.asgi.Request) -> dict[str, Any]:
        body = await req.get_media(default_when_empty=None)
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        return body

    def _reject_unknown(
        self, body: dict[str, Any], *allowed: str, kind_fields: bool = True
    ) -> None:
        permitted = {*allowed, *(self._kind.extra_fields if kind_fields else ())}
        unknown = set(body) - permitted
        if unknown:
            raise ValidationError(
                f"Unsupported field(s): {', '.join(sorted(unknown))}"
            )

    def _extra(self, body: dict[str, Any]) -> dict[str, Any]:
        extra = {}
        for name in self._kind.extra_fields:
            if name in body:
                value = body[name]
                if value is not None and not isinstance(value, str):
                    raise ValidationError(f"{name} must be a string")
                extra[name] = value
        return extra


def _optional_bool(body: dict[str, Any], name: str) -> bool | None:
    value = body.get(name)
    if value is not None and not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean")
    return value


def _optional_str(body: dict[str, Any], name: str) -> str | None:
    value = body.get(name)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


class EntitiesResource(_RegistryResource):
    """GET/POST /v1/<resource>[/{entity_type}] - list and create."""

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        entity_type: str | None = None,
    ) -> None:
        """List entities of the type, sorted by display name."""
        actor = self._actor(req, resp)
        if not actor:
            return

        scope = self._type(entity_type)
        filters = EntityFilters(
            active=req.get_param_as_bool("active"),
            search=req.get_param("search"),
        )
        entities = await self._registry.find_all(filters, actor, scope)
        resp.media = {"data": [serialize_entity(e) for e in entities]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        entity_type: str | None = None,
    ) -> None:
        """Create entity; slug is derived from display_name."""
        actor = self._actor(req, resp)
        if not actor:
            return

        scope = self._type(entity_type)
        body = await self._body(req)
        self._reject_unknown(body, "display_name", "active")
        display_name = _optional_str(body, "display_name")
        if not display_name:
            raise ValidationError("Missing required field: display_name")
        active = _optional_bool(body, "active")

        result = await self._registry.create(
            EntityCreateInput(
                display_name=display_name,
                active=True if active is None else active,
                extra=self._extra(body),
            ),
            actor,
            scope,
        )
        resp.media = serialize_result(result)
        resp.status = falcon.HTTP_201


class EntityResource(_RegistryResource):
    """GET/PATCH/DELETE /v1/<resource>[/{entity_type}]/{entity_id}."""

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        entity_id: str,
        entity_type: str | None = None,
    ) -> None:
        """Get entity by id."""
        actor = self._actor(req, resp)
        if not actor:
            return

        scope = self._type(entity_type)
        entity = await self._registry.find_one(self._id(entity_id), actor, scope)
        resp.media = serialize_entity(entity)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        entity_id: str,
        entity_type: str | None = None,
    ) -> None:
        """Partial update of display_name, active and kind-specific fields."""
        actor = self._actor(req, resp)
        if not actor:
            return

        scope = self._type(entity_type)
        target = self._id(entity_id)
        body = await self._body(req)
        self._reject_unknown(body, "display_name", "active")
        patch = EntityPatch(
            display_name=_optional_str(body, "display_name"),
            active=_optional_bool(body, "active"),
            extra=self._extra(body),
        )
        result = await self._registry.update(target, patch, actor, scope)
        resp.media = serialize_result(result)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        entity_id: str,
        entity_type: str | None = None,
    ) -> None:
        """Hard delete entity."""
        actor = self._actor(req, resp)
        if not actor:
            return

        scope = self._type(entity_type)
        result = await self._registry.remove(self._id(entity_id), actor, scope)
        resp.media = serialize_result(result)
        resp.status = falcon.HTTP_200


class EntityToggleResource(_RegistryResource):
    """PATCH /v1/<resource>[/{entity_type}]/toggle/{entity_id} - set active flag."""

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        entity_id: str,
        entity_type: str | None = None,
    ) -> None:
        """Set active to the requested value."""
        actor = self._actor(req, resp)
        if not actor:
            return

        scope = self._type(entity_type)
        target = self._id(entity_id)
        body = await self._body(req)
        self._reject_unknown(body, "active", kind_fields=False)
        active = _optional_bool(body, "active")
        if active is None:
            raise ValidationError("Missing required field: active")

        result = await self._registry.toggle_status(target, active, actor, scope)
        resp.media = serialize_result(result)
        resp.status = falcon.HTTP_200
