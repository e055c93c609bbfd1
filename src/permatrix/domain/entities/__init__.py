"""Domain entities."""

from permatrix.domain.entities.catalog import Action, Module
from permatrix.domain.entities.role import Role
from permatrix.domain.entities.role_preset import RolePreset
from permatrix.domain.entities.user import UserAccess, UserSummary

__all__ = [
    "Action",
    "Module",
    "Role",
    "RolePreset",
    "UserAccess",
    "UserSummary",
]
