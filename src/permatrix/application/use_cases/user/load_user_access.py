"""Load user access use case."""

from permatrix.domain.entities import UserAccess
from permatrix.domain.exceptions import NotFound


class LoadUserAccessUseCase:
    """Load a user's stored role, locations and override for an edit session."""

    def __init__(self, gateway_factory: type) -> None:
        self._gateway_factory = gateway_factory

    async def execute(self, user_id: int) -> UserAccess:
        async with self._gateway_factory() as api:
            access = await api.users.get_access(user_id)
        if access is None:
            raise NotFound(f"User {user_id} not found")
        return access
