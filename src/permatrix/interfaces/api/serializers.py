"""JSON shapes returned by the service resources."""

from typing import Any

from permatrix.application.dto.access_payload import grants_to_presets
from permatrix.application.dto.cascade import CascadeOutcome
from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.application.services.edit_session import EditSession
from permatrix.application.services.role_change_reconciler import ReconcileResult
from permatrix.domain.entities import Action, Module, RolePreset
from permatrix.domain.services.role_visibility import RoleVisibility


def module_to_dict(module: Module) -> dict[str, Any]:
    return {"id": module.id, "name": module.name, "alias": module.alias}


def action_to_dict(action: Action) -> dict[str, Any]:
    return {"id": action.id, "name": action.name}


def visibility_to_dict(visibility: RoleVisibility) -> dict[str, Any]:
    current = visibility.current_role
    return {
        "options": [{"id": o.id, "label": o.label} for o in visibility.options],
        "current_role": (
            {
                "id": current.id,
                "label": current.label,
                "reason": current.reason.value,
            }
            if current
            else None
        ),
    }


def defaults_to_dict(defaults: RoleDefaults) -> dict[str, Any]:
    return {
        "role_id": defaults.role_id,
        "location_ids": list(defaults.location_ids),
        "presets": grants_to_presets(defaults.grants),
    }


def preset_to_dict(preset: RolePreset) -> dict[str, Any]:
    return {
        "id": preset.id,
        "role_id": preset.role_id,
        "location_ids": list(preset.location_ids),
        "presets": grants_to_presets(preset.grants),
        "status_id": int(preset.status),
    }


def outcome_to_dict(outcome: CascadeOutcome) -> dict[str, Any]:
    return {
        "user_id": outcome.user_id,
        "status": outcome.status.value,
        "reason": outcome.reason,
        "error": outcome.error,
    }


def cascade_report(outcomes: list[CascadeOutcome]) -> dict[str, Any]:
    """Per-user outcomes plus counts."""
    succeeded = sum(1 for o in outcomes if o.succeeded)
    return {
        "items": [outcome_to_dict(o) for o in outcomes],
        "succeeded": succeeded,
        "failed": len(outcomes) - succeeded,
    }


def session_to_dict(session: EditSession) -> dict[str, Any]:
    reconciler = session.reconciler
    return {
        "id": session.id,
        "mode": reconciler.mode.value,
        "state": reconciler.state.value,
        "original_role_id": reconciler.original_role_id,
        "role_id": session.working.role_id,
        "location_ids": list(session.working.location_ids),
        "presets": grants_to_presets(session.working.grants),
    }


def reconcile_to_dict(result: ReconcileResult, session: EditSession) -> dict[str, Any]:
    return {
        "outcome": result.outcome.value,
        "role_id": result.role_id,
        "message": result.message,
        "session": session_to_dict(session),
    }
