"""Repository ports."""

from permatrix.application.ports.repositories.catalog_repository import (
    CatalogRepository,
)
from permatrix.application.ports.repositories.role_preset_repository import (
    RolePresetRepository,
)
from permatrix.application.ports.repositories.role_repository import RoleRepository
from permatrix.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "CatalogRepository",
    "RolePresetRepository",
    "RoleRepository",
    "UserRepository",
]
