"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from entityhub.domain.value_objects import ActorContext
from entityhub.interfaces.api.app import create_app


class AuthBypassMiddleware:
    """Middleware that sets context.actor for testing."""

    def __init__(self, actor: ActorContext | None) -> None:
        self._actor = actor

    async def process_request(self, req, resp):
        req.context.actor = self._actor


@pytest.fixture
def app(icon_registry, role_registry, actor):
    """Falcon ASGI app over in-memory registries."""
    return create_app(icon_registry, role_registry, middleware=[AuthBypassMiddleware(actor)])


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)


@pytest.fixture
def unauthenticated_client(icon_registry, role_registry) -> TestClient:
    """Client whose bearer token failed validation."""
    return TestClient(
        create_app(icon_registry, role_registry, middleware=[AuthBypassMiddleware(None)])
    )
