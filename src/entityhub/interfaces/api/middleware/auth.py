"""Auth middleware - resolves the actor from a bearer token or allows anonymous."""

import falcon.asgi

from entityhub.domain.value_objects import ActorContext
from entityhub.infrastructure.auth.keycloak_provider import KeycloakProvider


class AuthMiddleware:
    """Middleware that validates JWT and sets req.context.actor.

    No Authorization header yields the anonymous actor; a bearer token that
    cannot be validated yields None, which resources answer with 401.
    """

    def __init__(self, keycloak_provider: KeycloakProvider | None = None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract actor from Authorization header."""
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            token = auth[7:]
            req.context.actor = self._keycloak.decode_token(token) if self._keycloak else None
        else:
            req.context.actor = ActorContext.anonymous()
