"""Edit session - one user form interaction over a reconciler."""

from collections.abc import Iterable
from typing import Any

from permatrix.application.dto.access_payload import user_access_payload
from permatrix.application.services.role_change_reconciler import (
    ReconcileResult,
    RoleChangeReconciler,
)
from permatrix.domain.services import matrix


class EditSession:
    """Working grants of one user form, adjusted by role changes and toggles."""

    def __init__(self, session_id: str, reconciler: RoleChangeReconciler) -> None:
        self.id = session_id
        self.reconciler = reconciler

    @property
    def working(self):
        return self.reconciler.working

    async def change_role(self, role_id: int) -> ReconcileResult:
        return await self.reconciler.change_role(role_id)

    def toggle_cell(self, module_id: int, action_id: int) -> None:
        self.working.grants = matrix.toggle_cell(
            self.working.grants, module_id, action_id
        )

    def toggle_row(self, module_id: int, all_action_ids: Iterable[int]) -> None:
        self.working.grants = matrix.toggle_row(
            self.working.grants, module_id, all_action_ids
        )

    def toggle_column(self, visible_modules: Iterable[int], action_id: int) -> None:
        self.working.grants = matrix.toggle_column(
            self.working.grants, visible_modules, action_id
        )

    def set_locations(self, location_ids: Iterable[int]) -> None:
        self.working.location_ids = tuple(dict.fromkeys(location_ids))

    def payload(self) -> dict[str, Any]:
        """User create/update fragment for the resolved access."""
        return {
            "role_id": self.working.role_id,
            **user_access_payload(self.working.location_ids, self.working.grants),
        }
