"""Admin API gateway - repository bundle over one shared client."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from permatrix.infrastructure.admin_api.client import AdminApiClient
from permatrix.infrastructure.admin_api.repositories import (
    ApiCatalogRepository,
    ApiRolePresetRepository,
    ApiRoleRepository,
    ApiUserRepository,
)


class AdminApiGateway:
    """Repositories bound to one AdminApiClient."""

    def __init__(self, client: AdminApiClient) -> None:
        self._catalog = ApiCatalogRepository(client)
        self._roles = ApiRoleRepository(client)
        self._role_presets = ApiRolePresetRepository(client)
        self._users = ApiUserRepository(client)

    @property
    def catalog(self) -> ApiCatalogRepository:
        return self._catalog

    @property
    def roles(self) -> ApiRoleRepository:
        return self._roles

    @property
    def role_presets(self) -> ApiRolePresetRepository:
        return self._role_presets

    @property
    def users(self) -> ApiUserRepository:
        return self._users


def create_gateway_factory(client: AdminApiClient) -> object:
    """Create AdminGateway factory (async context manager).

    The client is shared and owned by the caller (closed via the ASGI
    lifespan); a gateway only scopes repository access.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[AdminApiGateway]:
        yield AdminApiGateway(client)

    return factory
