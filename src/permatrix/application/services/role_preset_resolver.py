"""Role preset resolver - default grants and locations for a role."""

import logging

from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class RolePresetResolver:
    """Fetches a role's preset defaults through the admin gateway."""

    def __init__(self, gateway_factory: type) -> None:
        self._gateway_factory = gateway_factory

    async def resolve(self, role_id: int) -> RoleDefaults:
        """Return the role's defaults.

        Role ids below 1 mean "no role selected" and resolve to empty
        defaults without a request. Raises NotFound when the role has no
        preset; TransportFailure propagates from the gateway.
        """
        if role_id <= 0:
            return RoleDefaults(role_id=role_id)

        async with self._gateway_factory() as api:
            defaults = await api.role_presets.get_defaults(role_id)
        if defaults is None:
            raise NotFound(f"Role {role_id} has no preset defined")

        logger.debug(
            "Resolved preset for role %s: %d modules, %d locations",
            role_id,
            len(defaults.grants),
            len(defaults.location_ids),
            extra={"role_id": role_id},
        )
        return defaults
