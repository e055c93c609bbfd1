"""Wire payloads for user and role preset submission."""

from collections.abc import Iterable
from typing import Any

from permatrix.domain.value_objects import GrantSet


def grants_to_presets(grants: GrantSet) -> list[dict[str, Any]]:
    """GrantSet -> [{module_ids, action_ids}] (singular module id, plural field name)."""
    return [
        {"module_ids": g.module_id, "action_ids": sorted(g.action_ids)}
        for g in grants
    ]


def presets_to_grants(presets: Iterable[dict[str, Any]]) -> GrantSet:
    """[{module_ids, action_ids}] -> GrantSet, dropping empty entries."""
    return GrantSet.from_pairs(
        (int(p["module_ids"]), (int(a) for a in p["action_ids"])) for p in presets
    )


def user_access_payload(
    location_ids: Iterable[int] | None = None,
    grants: GrantSet | None = None,
) -> dict[str, Any]:
    """User create/update fragment carrying only the fields given."""
    payload: dict[str, Any] = {}
    if location_ids is not None:
        payload["location_ids"] = list(location_ids)
    if grants is not None:
        payload["user_permission_presets"] = grants_to_presets(grants)
    return payload
