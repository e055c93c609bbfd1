"""Catalog entity status."""

from enum import IntEnum


class EntityStatus(IntEnum):
    """Lifecycle status shared by modules, actions, roles and presets (wire `status_id`)."""

    ACTIVE = 1
    INACTIVE = 2
