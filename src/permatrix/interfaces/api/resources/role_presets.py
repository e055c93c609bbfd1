"""Role preset resources - defaults, save and cascade."""

from typing import Any

import falcon.asgi

from permatrix.application.dto.access_payload import presets_to_grants
from permatrix.application.ports import PresetResolver
from permatrix.application.services.bulk_cascade import BulkCascadePropagator
from permatrix.application.use_cases.role_preset.save_role_preset import (
    SaveRolePresetInput,
    SaveRolePresetUseCase,
)
from permatrix.domain.entities import RolePreset
from permatrix.domain.exceptions import PermatrixError
from permatrix.domain.value_objects import EntityStatus
from permatrix.interfaces.api.errors import bad_request, respond_error
from permatrix.interfaces.api.serializers import (
    cascade_report,
    defaults_to_dict,
    preset_to_dict,
)


def _int_list(value: Any, name: str) -> list[int]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list")
    return [int(v) for v in value]


def _flag(body: dict[str, Any], name: str) -> bool:
    value = body.get(name, False)
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be a boolean")
    return value


def _parse_save_input(body: dict[str, Any], preset_id: int | None) -> SaveRolePresetInput:
    """Role preset form body -> SaveRolePresetInput. Raises KeyError/ValueError/TypeError."""
    status_id = int(body.get("status_id", EntityStatus.ACTIVE))
    try:
        status = EntityStatus(status_id)
    except ValueError:
        raise ValueError(f"Invalid status_id {status_id}") from None

    preset = RolePreset(
        id=preset_id,
        role_id=int(body["role_id"]),
        location_ids=tuple(dict.fromkeys(_int_list(body.get("location_ids"), "location_ids"))),
        grants=presets_to_grants(body.get("presets") or []),
        status=status,
    )
    return SaveRolePresetInput(
        preset=preset,
        user_ids=_int_list(body.get("user_ids"), "user_ids"),
        apply_permissions_to_users=_flag(body, "apply_permissions_to_users"),
        apply_locations_to_users=_flag(body, "apply_locations_to_users"),
    )


class RoleDefaultsResource:
    """GET /v1/roles/{role_id}/defaults - resolved preset for a role."""

    def __init__(self, resolver: PresetResolver) -> None:
        self._resolver = resolver

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        try:
            rid = int(role_id)
        except ValueError:
            bad_request(resp, "Invalid role ID")
            return

        try:
            defaults = await self._resolver.resolve(rid)
        except PermatrixError as e:
            respond_error(resp, e)
            return

        resp.media = defaults_to_dict(defaults)
        resp.status = falcon.HTTP_200


class RolePresetsResource:
    """POST /v1/role-presets - create a preset, optionally cascading it."""

    def __init__(self, save_preset: SaveRolePresetUseCase) -> None:
        self._save = save_preset

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        try:
            body = await req.get_media()
            input_data = _parse_save_input(body, preset_id=None)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            bad_request(resp, f"Invalid role preset: {e}")
            return

        try:
            result = await self._save.execute(input_data)
        except PermatrixError as e:
            respond_error(resp, e)
            return

        resp.media = {
            "preset": preset_to_dict(result.preset),
            "cascade": cascade_report(result.cascade),
        }
        resp.status = falcon.HTTP_201


class RolePresetResource:
    """PUT /v1/role-presets/{preset_id} - update a preset, optionally cascading it."""

    def __init__(self, save_preset: SaveRolePresetUseCase) -> None:
        self._save = save_preset

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        preset_id: str,
    ) -> None:
        try:
            body = await req.get_media()
            input_data = _parse_save_input(body, preset_id=int(preset_id))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            bad_request(resp, f"Invalid role preset: {e}")
            return

        try:
            result = await self._save.execute(input_data)
        except PermatrixError as e:
            respond_error(resp, e)
            return

        resp.media = {
            "preset": preset_to_dict(result.preset),
            "cascade": cascade_report(result.cascade),
        }
        resp.status = falcon.HTTP_200


class RoleCascadeResource:
    """POST /v1/roles/{role_id}/cascade - push a role's preset to users."""

    def __init__(self, propagator: BulkCascadePropagator) -> None:
        self._propagator = propagator

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        role_id: str,
    ) -> None:
        """Body: {user_ids, apply_permissions, apply_locations}."""
        try:
            rid = int(role_id)
            body = await req.get_media()
            user_ids = _int_list(body.get("user_ids"), "user_ids")
            apply_permissions = _flag(body, "apply_permissions")
            apply_locations = _flag(body, "apply_locations")
        except (ValueError, TypeError, AttributeError) as e:
            bad_request(resp, f"Invalid cascade request: {e}")
            return

        outcomes = await self._propagator.cascade(
            rid, user_ids, apply_permissions, apply_locations
        )
        resp.media = cascade_report(outcomes)
        resp.status = falcon.HTTP_200
