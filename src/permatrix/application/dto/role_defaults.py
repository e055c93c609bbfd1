"""Role defaults DTO - what a role preset seeds into a user."""

from dataclasses import dataclass, field

from permatrix.domain.value_objects import GrantSet


@dataclass(frozen=True)
class RoleDefaults:
    """Location set and grant set a role hands to its users."""

    role_id: int
    location_ids: tuple[int, ...] = ()
    grants: GrantSet = field(default_factory=GrantSet)
