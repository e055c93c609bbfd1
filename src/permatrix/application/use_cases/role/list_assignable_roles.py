"""List assignable roles use case."""

from permatrix.domain.services.role_visibility import RoleVisibility, visible_roles


class ListAssignableRolesUseCase:
    """Roles an administrator may assign, plus a notice for the edited user's role."""

    def __init__(self, gateway_factory: type) -> None:
        self._gateway_factory = gateway_factory

    async def execute(
        self,
        acting_admin_level: int,
        editing_user_current_role_id: int | None = None,
    ) -> RoleVisibility:
        """Reconcile all roles with the active-preset listing and filter by level."""
        async with self._gateway_factory() as api:
            all_roles = await api.roles.list_all()
            with_presets = await api.roles.list_role_ids_with_active_presets()
        return visible_roles(
            all_roles,
            acting_admin_level,
            editing_user_current_role_id,
            preset_role_ids=with_presets,
        )
