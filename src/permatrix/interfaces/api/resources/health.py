"""Health check endpoints."""

from collections.abc import Awaitable, Callable
from typing import Any

import falcon.asgi

from permatrix.domain.exceptions import PermatrixError


class HealthResource:
    """Liveness, plus readiness that probes the admin backend when configured."""

    def __init__(self, probe: Callable[[], Awaitable[Any]] | None = None) -> None:
        self._probe = probe

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - admin API reachable."""
        if self._probe is not None:
            try:
                await self._probe()
            except PermatrixError as e:
                resp.media = {"status": "unavailable", "error": str(e)}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
