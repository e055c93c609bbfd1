"""Catalog repository port."""

from typing import Protocol

from permatrix.domain.entities import Action, Module


class CatalogRepository(Protocol):
    """Port for module and action catalog listing."""

    async def list_modules(self) -> list[Module]: ...

    async def list_actions(self) -> list[Action]: ...
