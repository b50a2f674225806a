"""Falcon ASGI application."""

from collections.abc import Sequence

import falcon.asgi
from falcon.asgi import App

from entityhub.application.use_cases.registry import EntityRegistry
from entityhub.domain.exceptions import EntityHubError
from entityhub.domain.value_objects import IconType
from entityhub.interfaces.api.errors import handle_domain_error, handle_unexpected_error
from entityhub.interfaces.api.resources.entities import (
    EntitiesResource,
    EntityResource,
    EntityToggleResource,
)
from entityhub.interfaces.api.resources.health import HealthResource


def create_app(
    icon_registry: EntityRegistry,
    role_registry: EntityRegistry,
    health_resource: HealthResource | None = None,
    middleware: Sequence[object] = (),
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=list(middleware))
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(EntityHubError, handle_domain_error)

    health = health_resource or HealthResource()
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")

    app.add_route("/v1/icons", EntitiesResource(icon_registry, fixed_type=IconType.ICON))
    app.add_route(
        "/v1/icons/toggle/{entity_id}",
        EntityToggleResource(icon_registry, fixed_type=IconType.ICON),
    )
    app.add_route(
        "/v1/icons/{entity_id}",
        EntityResource(icon_registry, fixed_type=IconType.ICON),
    )

    app.add_route("/v1/roles/{entity_type}", EntitiesResource(role_registry))
    app.add_route(
        "/v1/roles/{entity_type}/toggle/{entity_id}",
        EntityToggleResource(role_registry),
    )
    app.add_route("/v1/roles/{entity_type}/{entity_id}", EntityResource(role_registry))
    return app
