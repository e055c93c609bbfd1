"""Role entity - flat hierarchy ordered by level."""

from dataclasses import dataclass

from permatrix.domain.value_objects import EntityStatus


@dataclass(frozen=True)
class Role:
    """Role with an authority level (lower level = more authority)."""

    id: int
    name: str
    level: int
    status: EntityStatus = EntityStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is EntityStatus.ACTIVE
