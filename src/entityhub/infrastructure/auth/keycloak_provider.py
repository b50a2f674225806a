"""Keycloak OIDC provider - resolves bearer tokens into actor contexts."""

import logging

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from entityhub.domain.value_objects import ActorContext

logger = logging.getLogger(__name__)


class KeycloakProvider:
    """Keycloak OIDC - validates JWT and extracts the actor."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> ActorContext | None:
        """Introspect token, return the actor or None when inactive/invalid."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as exc:
            logger.warning("Token introspection failed: %s", exc)
            return None
        if not token_info.get("active"):
            return None
        return ActorContext(
            actor_id=token_info.get("sub", ""),
            username=token_info.get("preferred_username"),
            email=token_info.get("email"),
            roles=tuple(token_info.get("realm_access", {}).get("roles", [])),
        )
