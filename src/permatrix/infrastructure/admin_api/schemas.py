"""Admin API response envelopes.

One documented shape per endpoint, validated strictly. A body that does not
match raises MalformedResponse; nothing is probed for alternative wrappers.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.domain.entities import Action, Module, Role, UserAccess, UserSummary
from permatrix.domain.exceptions import MalformedResponse
from permatrix.domain.value_objects import EntityStatus, GrantSet

T = TypeVar("T")


def _status(status_id: int) -> EntityStatus:
    """Unknown status ids count as inactive."""
    if status_id == EntityStatus.ACTIVE:
        return EntityStatus.ACTIVE
    return EntityStatus.INACTIVE


class _Record(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class ModuleRecord(_Record):
    """GET /modules item."""

    id: int
    module_name: str
    module_alias: str | None = None
    status_id: int

    def to_entity(self) -> Module:
        return Module(
            id=self.id,
            name=self.module_name,
            alias=self.module_alias or "",
            status=_status(self.status_id),
        )


class ActionRecord(_Record):
    """GET /actions item."""

    id: int
    action_name: str
    status_id: int

    def to_entity(self) -> Action:
        return Action(id=self.id, name=self.action_name, status=_status(self.status_id))


class RoleRecord(_Record):
    """GET /roles item."""

    id: int
    role_name: str
    role_level: int
    status_id: int

    def to_entity(self) -> Role:
        return Role(
            id=self.id,
            name=self.role_name,
            level=self.role_level,
            status=_status(self.status_id),
        )


class RoleActionPresetRecord(_Record):
    """GET /role-action-presets item (presets-derived role listing)."""

    role_id: int
    status_id: int


class PresetRecord(_Record):
    """{module_ids, action_ids} grant entry."""

    module_ids: int
    action_ids: list[int]


class NestedRolePresetRecord(_Record):
    """GET /role-presets/nested/{role_id}."""

    location_ids: list[int]
    presets: list[PresetRecord]

    def to_defaults(self, role_id: int) -> RoleDefaults:
        return RoleDefaults(
            role_id=role_id,
            location_ids=tuple(dict.fromkeys(self.location_ids)),
            grants=GrantSet.from_pairs(
                (p.module_ids, p.action_ids) for p in self.presets
            ),
        )


class SavedRolePresetRecord(_Record):
    """POST/PUT /role-presets answer; only the id is relied on."""

    id: int


class UserInfoRecord(_Record):
    """GET /users?role_id= item."""

    id: int
    full_name: str | None = None

    def to_entity(self) -> UserSummary:
        return UserSummary(id=self.id, full_name=self.full_name)


class _IdRecord(_Record):
    id: int


class NestedUserActionRecord(_Record):
    id: int
    permission_status_id: int


class NestedUserModuleRecord(_Record):
    id: int
    actions: list[NestedUserActionRecord] = []


class NestedUserRecord(_Record):
    """GET /users/nested/{id}."""

    user_id: int
    role: _IdRecord
    locations: list[_IdRecord] = []
    modules: list[NestedUserModuleRecord] = []

    def to_entity(self) -> UserAccess:
        # Only actions whose user permission is active count as granted.
        override = GrantSet.from_pairs(
            (
                m.id,
                [
                    a.id
                    for a in m.actions
                    if a.permission_status_id == EntityStatus.ACTIVE
                ],
            )
            for m in self.modules
        )
        return UserAccess(
            user_id=self.user_id,
            role_id=self.role.id,
            location_ids=tuple(dict.fromkeys(loc.id for loc in self.locations)),
            override=override,
        )


def decode(model: type[T] | Any, payload: Any, what: str) -> T:
    """Validate payload against model (a type or list[type])."""
    try:
        return TypeAdapter(model).validate_python(payload)
    except PydanticValidationError as e:
        raise MalformedResponse(
            f"{what}: unexpected response shape ({e.error_count()} errors)"
        ) from e
