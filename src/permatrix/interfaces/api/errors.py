"""Domain error -> HTTP status mapping for resources."""

import falcon
import falcon.asgi

from permatrix.domain.exceptions import (
    NotFound,
    PermatrixError,
    ScopeViolation,
    TransportFailure,
    ValidationError,
)

_STATUS = (
    (NotFound, falcon.HTTP_404),
    (ValidationError, falcon.HTTP_400),
    (ScopeViolation, falcon.HTTP_409),
    (TransportFailure, falcon.HTTP_502),
)


def respond_error(resp: falcon.asgi.Response, ex: PermatrixError) -> None:
    """Set status and {"error": ...} body for a domain error."""
    for exc_type, status in _STATUS:
        if isinstance(ex, exc_type):
            resp.status = status
            break
    else:
        resp.status = falcon.HTTP_500
    resp.media = {"error": str(ex)}


def bad_request(resp: falcon.asgi.Response, message: str) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": message}
