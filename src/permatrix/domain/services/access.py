"""Access checks against a resolved grant set.

Consumers (sidebar, button guards) ask by module alias and action name;
the catalog maps those to ids.
"""

from collections.abc import Sequence

from permatrix.domain.entities import Action, Module
from permatrix.domain.value_objects import GrantSet

VIEW_ACTION = "view"


def _find_module(modules: Sequence[Module], module_alias: str) -> Module | None:
    alias = module_alias.strip().lower()
    for module in modules:
        if (module.alias or "").lower() == alias:
            return module
    return None


def _find_action(actions: Sequence[Action], action_name: str) -> Action | None:
    name = action_name.strip().lower()
    for action in actions:
        if action.name.lower() == name:
            return action
    return None


def has_module_permission(
    grants: GrantSet,
    modules: Sequence[Module],
    actions: Sequence[Action],
    module_alias: str,
    action_name: str,
) -> bool:
    """True when grants allow action_name on the module with module_alias."""
    module = _find_module(modules, module_alias)
    action = _find_action(actions, action_name)
    if module is None or action is None:
        return False
    return action.id in grants.actions_for(module.id)


def can_view_module(
    grants: GrantSet,
    modules: Sequence[Module],
    actions: Sequence[Action],
    module_alias: str,
) -> bool:
    return has_module_permission(grants, modules, actions, module_alias, VIEW_ACTION)


def authorized_modules(
    grants: GrantSet,
    modules: Sequence[Module],
    actions: Sequence[Action],
) -> list[Module]:
    """Modules the grant set can view, in catalog order."""
    view = _find_action(actions, VIEW_ACTION)
    if view is None:
        return []
    return [m for m in modules if view.id in grants.actions_for(m.id)]
