"""Falcon error handlers."""

import logging

import falcon
import falcon.asgi

from entityhub.domain.exceptions import (
    Conflict,
    EntityHubError,
    InternalError,
    NotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[EntityHubError], str], ...] = (
    (ValidationError, falcon.HTTP_400),
    (NotFound, falcon.HTTP_404),
    (Conflict, falcon.HTTP_409),
    (InternalError, falcon.HTTP_500),
)


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: EntityHubError, params
) -> None:
    """Map domain errors to status codes with an ``{"error": ...}`` body."""
    for error_cls, status in _STATUS_BY_ERROR:
        if isinstance(ex, error_cls):
            resp.status = status
            break
    else:
        resp.status = falcon.HTTP_500
    resp.media = {"error": str(ex)}


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    """Log anything unhandled and answer with an opaque 500."""
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}
