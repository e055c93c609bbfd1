"""Catalog entities - modules and actions the matrix is built from."""

from dataclasses import dataclass

from permatrix.domain.value_objects import EntityStatus


@dataclass(frozen=True)
class Module:
    """Functional area of the console (users, locations, ...)."""

    id: int
    name: str
    alias: str
    status: EntityStatus = EntityStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is EntityStatus.ACTIVE


@dataclass(frozen=True)
class Action:
    """Operation type grantable per module (view, edit, approve, ...)."""

    id: int
    name: str
    status: EntityStatus = EntityStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is EntityStatus.ACTIVE
