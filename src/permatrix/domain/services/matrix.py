"""Matrix toggle algebra over a GrantSet.

All operations are pure: they take a GrantSet and return a new one. Row and
column toggles are tri-state. When every cell in scope is granted they
clear it, otherwise they fill the missing cells. The visible module set
only narrows a column toggle's scope; it never filters the GrantSet itself.
"""

from collections.abc import Iterable, Sequence

from permatrix.domain.entities import Module
from permatrix.domain.value_objects import GrantSet


def is_granted(grants: GrantSet, module_id: int, action_id: int) -> bool:
    """True iff module has an entry and action is in it."""
    return action_id in grants.actions_for(module_id)


def set_cell(
    grants: GrantSet, module_id: int, action_id: int, checked: bool
) -> GrantSet:
    """Grant or revoke a single cell explicitly."""
    actions = grants.actions_for(module_id)
    if checked:
        if action_id in actions:
            return grants
        return grants.with_actions(module_id, actions | {action_id})
    if action_id not in actions:
        return grants
    return grants.with_actions(module_id, actions - {action_id})


def toggle_cell(grants: GrantSet, module_id: int, action_id: int) -> GrantSet:
    """Flip one cell; the last revoked action drops the module entry."""
    return set_cell(
        grants, module_id, action_id, not is_granted(grants, module_id, action_id)
    )


def toggle_column(
    grants: GrantSet, visible_modules: Iterable[int], action_id: int
) -> GrantSet:
    """Flip one action across the visible modules only."""
    scope = list(dict.fromkeys(visible_modules))
    if not scope:
        return grants

    all_granted = all(is_granted(grants, m, action_id) for m in scope)
    result = grants
    for module_id in scope:
        result = set_cell(result, module_id, action_id, not all_granted)
    return result


def toggle_row(
    grants: GrantSet, module_id: int, all_action_ids: Iterable[int]
) -> GrantSet:
    """Flip every action of one module."""
    actions = frozenset(all_action_ids)
    if not actions:
        return grants

    current = grants.actions_for(module_id)
    if actions <= current:
        return grants.without_module(module_id)
    return grants.with_actions(module_id, current | actions)


def filter_modules(modules: Sequence[Module], query: str | None) -> list[Module]:
    """Modules whose name or alias contains query (case-insensitive)."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(modules)
    return [
        m
        for m in modules
        if needle in m.name.lower() or needle in (m.alias or "").lower()
    ]
