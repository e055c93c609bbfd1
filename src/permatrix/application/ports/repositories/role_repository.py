"""Role repository port."""

from typing import Protocol

from permatrix.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role listing."""

    async def list_all(self) -> list[Role]: ...

    async def list_role_ids_with_active_presets(self) -> set[int]: ...
