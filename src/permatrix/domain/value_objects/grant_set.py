"""Grant and GrantSet - (module, actions) capability grants."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Grant:
    """Actions granted within one module. Never empty."""

    module_id: int
    action_ids: frozenset[int]

    def __post_init__(self) -> None:
        if not self.action_ids:
            raise ValueError(f"Grant for module {self.module_id} has no actions")


@dataclass(frozen=True, eq=False)
class GrantSet:
    """Ordered grants, unique by module.

    Every mutation returns a new GrantSet. Equality compares the
    module -> actions mapping; entry order only drives presentation.
    """

    grants: tuple[Grant, ...] = ()

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for grant in self.grants:
            if grant.module_id in seen:
                raise ValueError(f"Duplicate grant for module {grant.module_id}")
            seen.add(grant.module_id)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, Iterable[int]]]) -> "GrantSet":
        """Build from (module_id, action_ids) pairs.

        Duplicate modules are merged in first-seen position; modules that end
        up without actions are dropped.
        """
        merged: dict[int, set[int]] = {}
        for module_id, action_ids in pairs:
            merged.setdefault(module_id, set()).update(action_ids)
        return cls(
            tuple(
                Grant(module_id, frozenset(actions))
                for module_id, actions in merged.items()
                if actions
            )
        )

    def __iter__(self) -> Iterator[Grant]:
        return iter(self.grants)

    def __len__(self) -> int:
        return len(self.grants)

    def __contains__(self, module_id: object) -> bool:
        return any(g.module_id == module_id for g in self.grants)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GrantSet):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self) -> int:
        return hash(frozenset(self.as_dict().items()))

    def __repr__(self) -> str:
        body = ", ".join(
            f"{g.module_id}: {sorted(g.action_ids)}" for g in self.grants
        )
        return f"GrantSet({{{body}}})"

    @property
    def module_ids(self) -> tuple[int, ...]:
        return tuple(g.module_id for g in self.grants)

    def as_dict(self) -> dict[int, frozenset[int]]:
        return {g.module_id: g.action_ids for g in self.grants}

    def actions_for(self, module_id: int) -> frozenset[int]:
        """Granted actions for module (empty when the module has no entry)."""
        for grant in self.grants:
            if grant.module_id == module_id:
                return grant.action_ids
        return frozenset()

    def with_actions(self, module_id: int, action_ids: Iterable[int]) -> "GrantSet":
        """Replace a module's actions.

        An existing entry keeps its position, a new one is appended, and an
        empty action set removes the entry.
        """
        actions = frozenset(action_ids)
        updated: list[Grant] = []
        replaced = False
        for grant in self.grants:
            if grant.module_id != module_id:
                updated.append(grant)
                continue
            replaced = True
            if actions:
                updated.append(Grant(module_id, actions))
        if not replaced and actions:
            updated.append(Grant(module_id, actions))
        return GrantSet(tuple(updated))

    def without_module(self, module_id: int) -> "GrantSet":
        return GrantSet(tuple(g for g in self.grants if g.module_id != module_id))
