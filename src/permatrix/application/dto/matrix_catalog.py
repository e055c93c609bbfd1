"""Matrix catalog DTO."""

from dataclasses import dataclass, field

from permatrix.domain.entities import Action, Module


@dataclass(frozen=True)
class MatrixCatalog:
    """Active modules (rows) and actions (columns) of the permission matrix."""

    modules: list[Module] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)

    @property
    def module_ids(self) -> list[int]:
        return [m.id for m in self.modules]

    @property
    def action_ids(self) -> list[int]:
        return [a.id for a in self.actions]
