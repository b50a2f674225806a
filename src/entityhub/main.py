"""Application entry point and composition root."""

import logging
import sys

import falcon
from falcon.asgi import App

from entityhub import __version__
from entityhub.application.use_cases.registry import ICON_KIND, ROLE_KIND, EntityRegistry
from entityhub.config import get_settings
from entityhub.infrastructure.auth.keycloak_provider import KeycloakProvider
from entityhub.infrastructure.persistence.postgres.conflict_translator import (
    PostgresConflictTranslator,
)
from entityhub.infrastructure.persistence.postgres.connection import create_pool
from entityhub.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from entityhub.interfaces.api.app import create_app
from entityhub.interfaces.api.middleware.auth import AuthMiddleware
from entityhub.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from entityhub.interfaces.api.resources.health import HealthResource

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send all entityhub logs to stderr at ``level``."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())


def main() -> None:
    """CLI entry point."""
    print(f"entityhub v{__version__}")


def create_entityhub_app() -> App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)
    conflict_translator = PostgresConflictTranslator()

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )

    icon_registry = EntityRegistry(ICON_KIND, uow_factory, conflict_translator)
    role_registry = EntityRegistry(ROLE_KIND, uow_factory, conflict_translator)

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    return create_app(
        icon_registry,
        role_registry,
        health_resource=HealthResource(pool),
        middleware=[
            falcon.CORSMiddleware(allow_origins=cors_origins or "*"),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_entityhub_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
