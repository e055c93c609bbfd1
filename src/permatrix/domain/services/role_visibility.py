"""Role visibility - which roles an acting administrator may assign."""

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from permatrix.domain.entities import Role


class UnavailableReason(StrEnum):
    """Why the editing user's current role is not assignable."""

    INACTIVE = "inactive"
    ABOVE_AUTHORITY = "above_authority"
    NO_ACTIVE_PRESET = "no_active_preset"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RoleOption:
    """Assignable role as shown in a select."""

    id: int
    label: str


@dataclass(frozen=True)
class CurrentRoleNotice:
    """Editing user's current role that fails the filter (shown, never offered)."""

    id: int
    label: str | None
    reason: UnavailableReason


@dataclass(frozen=True)
class RoleVisibility:
    """Assignable options plus an optional warning about the current role."""

    options: list[RoleOption] = field(default_factory=list)
    current_role: CurrentRoleNotice | None = None


def _rejection(
    role: Role, acting_admin_level: int, preset_role_ids: Collection[int] | None
) -> UnavailableReason | None:
    if not role.is_active:
        return UnavailableReason.INACTIVE
    if role.level < acting_admin_level:
        return UnavailableReason.ABOVE_AUTHORITY
    if preset_role_ids is not None and role.id not in preset_role_ids:
        return UnavailableReason.NO_ACTIVE_PRESET
    return None


def visible_roles(
    all_roles: Sequence[Role],
    acting_admin_level: int,
    editing_user_current_role_id: int | None = None,
    preset_role_ids: Collection[int] | None = None,
) -> RoleVisibility:
    """Filter roles to those the administrator may assign.

    A role is assignable when it is active and its level is equal to or
    numerically greater than the administrator's. When `preset_role_ids` is
    given the role must also carry an active preset. An editing user's
    current role that fails the filter comes back as `current_role` so the
    caller can warn about it.
    """
    options: list[RoleOption] = []
    seen: set[int] = set()
    by_id: dict[int, Role] = {}
    for role in all_roles:
        by_id.setdefault(role.id, role)
        if role.id in seen:
            continue
        seen.add(role.id)
        if _rejection(role, acting_admin_level, preset_role_ids) is None:
            options.append(RoleOption(id=role.id, label=role.name))

    current_role = None
    if editing_user_current_role_id and editing_user_current_role_id not in {
        o.id for o in options
    }:
        role = by_id.get(editing_user_current_role_id)
        if role is None:
            current_role = CurrentRoleNotice(
                id=editing_user_current_role_id,
                label=None,
                reason=UnavailableReason.UNKNOWN,
            )
        else:
            current_role = CurrentRoleNotice(
                id=role.id,
                label=role.name,
                reason=_rejection(role, acting_admin_level, preset_role_ids)
                or UnavailableReason.UNKNOWN,
            )

    return RoleVisibility(options=options, current_role=current_role)
