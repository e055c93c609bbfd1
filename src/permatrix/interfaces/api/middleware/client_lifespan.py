"""Client lifespan middleware - closes the admin API client on shutdown."""

import logging
from typing import Any

from permatrix.infrastructure.admin_api.client import AdminApiClient

logger = logging.getLogger(__name__)


class ClientLifespanMiddleware:
    """Middleware that owns the shared AdminApiClient for the app's lifetime."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        logger.info("Admin API client ready")

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pooled connections when the ASGI server shuts down."""
        await self._client.aclose()
