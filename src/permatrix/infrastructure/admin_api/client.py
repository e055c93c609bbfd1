"""Admin backend HTTP client."""

import logging
from typing import Any

import httpx

from permatrix.domain.exceptions import MalformedResponse, NotFound, TransportFailure

logger = logging.getLogger(__name__)


class AdminApiClient:
    """Thin JSON client over httpx with error translation.

    404 becomes NotFound; connection errors, other non-2xx answers and
    non-JSON bodies become TransportFailure.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("POST", path, json=body)

    async def put(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("PUT", path, json=body)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportFailure(f"{method} {path} failed: {e}") from e

        if response.status_code == 404:
            raise NotFound(f"{method} {path} returned 404")
        if response.is_error:
            logger.warning("%s %s returned %s", method, path, response.status_code)
            raise TransportFailure(
                f"{method} {path} returned {response.status_code}"
            )
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"{method} {path} returned non-JSON body") from e
