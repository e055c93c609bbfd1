"""Domain value objects."""

from permatrix.domain.value_objects.entity_status import EntityStatus
from permatrix.domain.value_objects.grant_set import Grant, GrantSet

__all__ = [
    "EntityStatus",
    "Grant",
    "GrantSet",
]
