"""Role preset repository port."""

from typing import Protocol

from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.domain.entities import RolePreset


class RolePresetRepository(Protocol):
    """Port for role preset persistence."""

    async def get_defaults(self, role_id: int) -> RoleDefaults | None: ...

    async def create(
        self,
        preset: RolePreset,
        user_ids: list[int],
        apply_permissions: bool,
        apply_locations: bool,
    ) -> RolePreset: ...

    async def update(
        self,
        preset: RolePreset,
        user_ids: list[int],
        apply_permissions: bool,
        apply_locations: bool,
    ) -> RolePreset: ...
