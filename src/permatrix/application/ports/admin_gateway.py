"""Admin gateway port - scoped access to the admin backend."""

from collections.abc import AsyncIterator
from typing import Protocol

from permatrix.application.ports.repositories.catalog_repository import (
    CatalogRepository,
)
from permatrix.application.ports.repositories.role_preset_repository import (
    RolePresetRepository,
)
from permatrix.application.ports.repositories.role_repository import RoleRepository
from permatrix.application.ports.repositories.user_repository import UserRepository


class AdminGateway(Protocol):
    """Repository access for one unit of interaction with the admin backend."""

    @property
    def catalog(self) -> CatalogRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def role_presets(self) -> RolePresetRepository: ...

    @property
    def users(self) -> UserRepository: ...


class AdminGatewayFactory(Protocol):
    """Factory for AdminGateway instances (async context manager)."""

    async def __call__(self) -> AsyncIterator[AdminGateway]: ...
