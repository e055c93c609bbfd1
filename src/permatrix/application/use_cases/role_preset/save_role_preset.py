"""Save role preset use case - persist, then cascade to selected users."""

import logging
from dataclasses import dataclass, field

from permatrix.application.dto.cascade import CascadeOutcome
from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.application.services.bulk_cascade import BulkCascadePropagator
from permatrix.domain.entities import RolePreset
from permatrix.domain.exceptions import ValidationError
from permatrix.domain.value_objects import EntityStatus

logger = logging.getLogger(__name__)


@dataclass
class SaveRolePresetInput:
    """Role preset form submission."""

    preset: RolePreset
    user_ids: list[int] = field(default_factory=list)
    apply_permissions_to_users: bool = False
    apply_locations_to_users: bool = False


@dataclass
class SaveRolePresetResult:
    """Saved preset and the per-user cascade report (empty when nothing cascaded)."""

    preset: RolePreset
    cascade: list[CascadeOutcome] = field(default_factory=list)


def validate_role_preset(preset: RolePreset) -> None:
    """Raise ValidationError when the preset cannot be saved."""
    if preset.role_id < 1:
        raise ValidationError("Please select a role")
    if not preset.location_ids:
        raise ValidationError("At least one location must be selected")
    if not preset.grants:
        raise ValidationError("At least one module-action permission must be set")
    if preset.status not in (EntityStatus.ACTIVE, EntityStatus.INACTIVE):
        raise ValidationError(f"Invalid status {preset.status!r}")


class SaveRolePresetUseCase:
    """Create or update a role preset and push it to the selected users."""

    def __init__(
        self,
        gateway_factory: type,
        propagator: BulkCascadePropagator,
    ) -> None:
        self._gateway_factory = gateway_factory
        self._propagator = propagator

    async def execute(self, input_data: SaveRolePresetInput) -> SaveRolePresetResult:
        """Persist the preset (create when it has no id) and cascade if requested."""
        validate_role_preset(input_data.preset)
        user_ids = list(dict.fromkeys(input_data.user_ids))

        async with self._gateway_factory() as api:
            if input_data.preset.id is None:
                saved = await api.role_presets.create(
                    input_data.preset,
                    user_ids,
                    input_data.apply_permissions_to_users,
                    input_data.apply_locations_to_users,
                )
            else:
                saved = await api.role_presets.update(
                    input_data.preset,
                    user_ids,
                    input_data.apply_permissions_to_users,
                    input_data.apply_locations_to_users,
                )
        logger.info(
            "Saved preset %s for role %s", saved.id, saved.role_id,
            extra={"role_id": saved.role_id},
        )

        wants_cascade = (
            input_data.apply_permissions_to_users
            or input_data.apply_locations_to_users
        )
        if not (wants_cascade and user_ids):
            return SaveRolePresetResult(preset=saved)

        outcomes = await self._propagator.cascade(
            saved.role_id,
            user_ids,
            apply_permissions=input_data.apply_permissions_to_users,
            apply_locations=input_data.apply_locations_to_users,
            defaults=RoleDefaults(
                role_id=saved.role_id,
                location_ids=saved.location_ids,
                grants=saved.grants,
            ),
        )
        return SaveRolePresetResult(preset=saved, cascade=outcomes)
