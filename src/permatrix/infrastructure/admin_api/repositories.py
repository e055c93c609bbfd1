"""Admin API repository implementations."""

from dataclasses import replace

from permatrix.application.dto.access_payload import (
    grants_to_presets,
    user_access_payload,
)
from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.domain.entities import (
    Action,
    Module,
    Role,
    RolePreset,
    UserAccess,
    UserSummary,
)
from permatrix.domain.exceptions import NotFound
from permatrix.domain.value_objects import EntityStatus, GrantSet
from permatrix.infrastructure.admin_api.client import AdminApiClient
from permatrix.infrastructure.admin_api.schemas import (
    ActionRecord,
    ModuleRecord,
    NestedRolePresetRecord,
    NestedUserRecord,
    RoleActionPresetRecord,
    RoleRecord,
    SavedRolePresetRecord,
    UserInfoRecord,
    decode,
)


class ApiCatalogRepository:
    """Catalog repository backed by GET /modules and GET /actions."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def list_modules(self) -> list[Module]:
        """List all modules (active and inactive)."""
        payload = await self._client.get("/modules")
        return [r.to_entity() for r in decode(list[ModuleRecord], payload, "GET /modules")]

    async def list_actions(self) -> list[Action]:
        """List all actions (active and inactive)."""
        payload = await self._client.get("/actions")
        return [r.to_entity() for r in decode(list[ActionRecord], payload, "GET /actions")]


class ApiRoleRepository:
    """Role repository backed by GET /roles and GET /role-action-presets."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def list_all(self) -> list[Role]:
        """List all roles, including inactive ones."""
        payload = await self._client.get("/roles")
        return [r.to_entity() for r in decode(list[RoleRecord], payload, "GET /roles")]

    async def list_role_ids_with_active_presets(self) -> set[int]:
        """Ids of roles that have an active preset."""
        payload = await self._client.get("/role-action-presets")
        records = decode(list[RoleActionPresetRecord], payload, "GET /role-action-presets")
        return {r.role_id for r in records if r.status_id == EntityStatus.ACTIVE}


class ApiRolePresetRepository:
    """Role preset repository backed by /role-presets."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def get_defaults(self, role_id: int) -> RoleDefaults | None:
        """Get the role's default locations and grants, None when it has no preset."""
        path = f"/role-presets/nested/{role_id}"
        try:
            payload = await self._client.get(path)
        except NotFound:
            return None
        return decode(NestedRolePresetRecord, payload, f"GET {path}").to_defaults(role_id)

    async def create(
        self,
        preset: RolePreset,
        user_ids: list[int],
        apply_permissions: bool,
        apply_locations: bool,
    ) -> RolePreset:
        """Create preset, return it with the backend id."""
        body = _preset_body(preset, user_ids, apply_permissions, apply_locations)
        payload = await self._client.post("/role-presets", body)
        saved = decode(SavedRolePresetRecord, payload, "POST /role-presets")
        return replace(preset, id=saved.id)

    async def update(
        self,
        preset: RolePreset,
        user_ids: list[int],
        apply_permissions: bool,
        apply_locations: bool,
    ) -> RolePreset:
        """Update existing preset."""
        path = f"/role-presets/{preset.id}"
        body = _preset_body(preset, user_ids, apply_permissions, apply_locations)
        payload = await self._client.put(path, body)
        if payload is None:
            return preset
        saved = decode(SavedRolePresetRecord, payload, f"PUT {path}")
        return replace(preset, id=saved.id)


class ApiUserRepository:
    """User repository backed by /users."""

    def __init__(self, client: AdminApiClient) -> None:
        self._client = client

    async def list_by_role(self, role_id: int) -> list[UserSummary]:
        """Users currently holding role."""
        payload = await self._client.get("/users", params={"role_id": role_id})
        records = decode(list[UserInfoRecord], payload, "GET /users")
        return [r.to_entity() for r in records]

    async def get_access(self, user_id: int) -> UserAccess | None:
        """Get user's stored role, locations and override."""
        path = f"/users/nested/{user_id}"
        try:
            payload = await self._client.get(path)
        except NotFound:
            return None
        return decode(NestedUserRecord, payload, f"GET {path}").to_entity()

    async def update_access(
        self,
        user_id: int,
        *,
        location_ids: tuple[int, ...] | None = None,
        grants: GrantSet | None = None,
    ) -> None:
        """Replace the given parts of a user's access."""
        body = user_access_payload(location_ids, grants)
        if not body:
            return
        await self._client.put(f"/users/{user_id}", body)


def _preset_body(
    preset: RolePreset,
    user_ids: list[int],
    apply_permissions: bool,
    apply_locations: bool,
) -> dict:
    return {
        "role_id": preset.role_id,
        "location_ids": list(preset.location_ids),
        "presets": grants_to_presets(preset.grants),
        "status_id": int(preset.status),
        "user_ids": list(user_ids),
        "apply_permissions_to_users": apply_permissions,
        "apply_locations_to_users": apply_locations,
    }
