"""User entities - stored access of one user."""

from dataclasses import dataclass, field

from permatrix.domain.value_objects import GrantSet


@dataclass(frozen=True)
class UserSummary:
    """User listed as holding a role."""

    id: int
    full_name: str | None = None


@dataclass(frozen=True)
class UserAccess:
    """User's role, locations and permission override as stored."""

    user_id: int
    role_id: int
    location_ids: tuple[int, ...] = ()
    override: GrantSet = field(default_factory=GrantSet)
