"""Role preset entity - default grants and locations for a role."""

from dataclasses import dataclass, field

from permatrix.domain.value_objects import EntityStatus, GrantSet


@dataclass
class RolePreset:
    """Default grant set and location scope attached to a role."""

    role_id: int
    location_ids: tuple[int, ...]
    grants: GrantSet = field(default_factory=GrantSet)
    status: EntityStatus = EntityStatus.ACTIVE
    id: int | None = None
