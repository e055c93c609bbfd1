"""User repository port."""

from typing import Protocol

from permatrix.domain.entities import UserAccess, UserSummary
from permatrix.domain.value_objects import GrantSet


class UserRepository(Protocol):
    """Port for user access persistence."""

    async def list_by_role(self, role_id: int) -> list[UserSummary]: ...

    async def get_access(self, user_id: int) -> UserAccess | None: ...

    async def update_access(
        self,
        user_id: int,
        *,
        location_ids: tuple[int, ...] | None = None,
        grants: GrantSet | None = None,
    ) -> None: ...
