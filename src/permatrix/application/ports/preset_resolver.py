"""Preset resolver port - role defaults lookup."""

from typing import Protocol

from permatrix.application.dto.role_defaults import RoleDefaults


class PresetResolver(Protocol):
    """Port for resolving a role's default grants and locations.

    Raises NotFound when the role has no preset and TransportFailure when
    the backend cannot answer.
    """

    async def resolve(self, role_id: int) -> RoleDefaults: ...
