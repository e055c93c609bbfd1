"""CORS middleware for the admin console origin(s)."""

import falcon.asgi

_ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"


class CORSMiddleware:
    """Echoes allowed origins and short-circuits preflight requests.

    `"*"` in origins allows any origin. Requests from other origins get no
    Access-Control-Allow-Origin header, so the browser blocks them.
    """

    def __init__(self, origins: list[str]) -> None:
        self._allow_any = "*" in origins
        self._origins = frozenset(o for o in origins if o != "*")

    def _allowed_origin(self, req: falcon.asgi.Request) -> str | None:
        origin = req.get_header("Origin")
        if origin is None:
            return None
        if self._allow_any or origin in self._origins:
            return origin
        return None

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        if req.method != "OPTIONS":
            return
        origin = self._allowed_origin(req)
        if origin is not None:
            resp.set_header("Access-Control-Allow-Methods", _ALLOWED_METHODS)
            resp.set_header(
                "Access-Control-Allow-Headers",
                req.get_header("Access-Control-Request-Headers") or "Content-Type",
            )
            resp.set_header("Access-Control-Max-Age", "86400")
        resp.status = falcon.HTTP_204
        resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        origin = self._allowed_origin(req)
        if origin is not None:
            resp.set_header("Access-Control-Allow-Origin", origin)
            resp.vary = ("Origin",)
