"""Pytest fixtures for permatrix tests."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import asynccontextmanager
from dataclasses import replace
from itertools import count

import pytest

from permatrix.application.dto.role_defaults import RoleDefaults
from permatrix.domain.entities import (
    Action,
    Module,
    Role,
    RolePreset,
    UserAccess,
    UserSummary,
)
from permatrix.domain.value_objects import EntityStatus, GrantSet


def grants(mapping: dict[int, Iterable[int]] | None = None) -> GrantSet:
    """GrantSet from {module_id: action_ids}, in dict order."""
    return GrantSet.from_pairs((mapping or {}).items())


# --- Catalog fixtures ---

VIEW, EDIT, APPROVE, ARCHIVED = 1, 2, 3, 4
USERS, LOCATIONS, TRANSACTIONS, RETIRED = 10, 11, 12, 13


def sample_modules() -> list[Module]:
    return [
        Module(id=USERS, name="Users", alias="users"),
        Module(id=LOCATIONS, name="Locations", alias="locations"),
        Module(id=TRANSACTIONS, name="Transactions", alias="transactions"),
        Module(id=RETIRED, name="Legacy Reports", alias="legacy", status=EntityStatus.INACTIVE),
    ]


def sample_actions() -> list[Action]:
    return [
        Action(id=VIEW, name="view"),
        Action(id=EDIT, name="edit"),
        Action(id=APPROVE, name="approve"),
        Action(id=ARCHIVED, name="archive", status=EntityStatus.INACTIVE),
    ]


def sample_roles() -> list[Role]:
    return [
        Role(id=1, name="Super Admin", level=1),
        Role(id=2, name="Manager", level=2),
        Role(id=3, name="Clerk", level=3),
        Role(id=4, name="Retired", level=3, status=EntityStatus.INACTIVE),
    ]


# --- Fake repositories ---


class FakeCatalogRepository:
    """In-memory catalog repository."""

    def __init__(
        self,
        modules: list[Module] | None = None,
        actions: list[Action] | None = None,
    ) -> None:
        self.modules = modules if modules is not None else sample_modules()
        self.actions = actions if actions is not None else sample_actions()

    async def list_modules(self) -> list[Module]:
        return list(self.modules)

    async def list_actions(self) -> list[Action]:
        return list(self.actions)


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(
        self,
        roles: list[Role] | None = None,
        preset_role_ids: set[int] | None = None,
    ) -> None:
        self.roles = roles if roles is not None else sample_roles()
        self.preset_role_ids = (
            preset_role_ids
            if preset_role_ids is not None
            else {r.id for r in self.roles}
        )

    async def list_all(self) -> list[Role]:
        return list(self.roles)

    async def list_role_ids_with_active_presets(self) -> set[int]:
        return set(self.preset_role_ids)


class FakeRolePresetRepository:
    """In-memory role preset repository.

    `errors` maps role ids to exceptions raised by get_defaults.
    """

    def __init__(self) -> None:
        self.defaults: dict[int, RoleDefaults] = {}
        self.errors: dict[int, Exception] = {}
        self.saved: list[tuple[RolePreset, list[int], bool, bool]] = []
        self.lookups: list[int] = []
        self._ids = count(100)

    def add_preset(
        self,
        role_id: int,
        location_ids: Iterable[int],
        mapping: dict[int, Iterable[int]],
    ) -> RoleDefaults:
        defaults = RoleDefaults(
            role_id=role_id,
            location_ids=tuple(location_ids),
            grants=grants(mapping),
        )
        self.defaults[role_id] = defaults
        return defaults

    async def get_defaults(self, role_id: int) -> RoleDefaults | None:
        self.lookups.append(role_id)
        if role_id in self.errors:
            raise self.errors[role_id]
        return self.defaults.get(role_id)

    async def create(
        self,
        preset: RolePreset,
        user_ids: list[int],
        apply_permissions: bool,
        apply_locations: bool,
    ) -> RolePreset:
        saved = replace(preset, id=next(self._ids))
        self._store(saved, user_ids, apply_permissions, apply_locations)
        return saved

    async def update(
        self,
        preset: RolePreset,
        user_ids: list[int],
        apply_permissions: bool,
        apply_locations: bool,
    ) -> RolePreset:
        self._store(preset, user_ids, apply_permissions, apply_locations)
        return preset

    def _store(
        self,
        preset: RolePreset,
        user_ids: list[int],
        apply_permissions: bool,
        apply_locations: bool,
    ) -> None:
        self.saved.append((preset, list(user_ids), apply_permissions, apply_locations))
        self.defaults[preset.role_id] = RoleDefaults(
            role_id=preset.role_id,
            location_ids=preset.location_ids,
            grants=preset.grants,
        )


class FakeUserRepository:
    """In-memory user repository.

    `errors` maps user ids to exceptions raised by update_access;
    `list_error` is raised by list_by_role when set.
    """

    def __init__(self) -> None:
        self.users: dict[int, UserAccess] = {}
        self.updates: list[tuple[int, tuple[int, ...] | None, GrantSet | None]] = []
        self.errors: dict[int, Exception] = {}
        self.list_error: Exception | None = None

    def add_user(
        self,
        user_id: int,
        role_id: int,
        location_ids: Iterable[int] = (),
        mapping: dict[int, Iterable[int]] | None = None,
    ) -> UserAccess:
        access = UserAccess(
            user_id=user_id,
            role_id=role_id,
            location_ids=tuple(location_ids),
            override=grants(mapping),
        )
        self.users[user_id] = access
        return access

    async def list_by_role(self, role_id: int) -> list[UserSummary]:
        if self.list_error is not None:
            raise self.list_error
        return [
            UserSummary(id=u.user_id, full_name=f"User {u.user_id}")
            for u in self.users.values()
            if u.role_id == role_id
        ]

    async def get_access(self, user_id: int) -> UserAccess | None:
        return self.users.get(user_id)

    async def update_access(
        self,
        user_id: int,
        *,
        location_ids: tuple[int, ...] | None = None,
        grants: GrantSet | None = None,
    ) -> None:
        if user_id in self.errors:
            raise self.errors[user_id]
        self.updates.append((user_id, location_ids, grants))
        access = self.users[user_id]
        if location_ids is not None:
            access = replace(access, location_ids=tuple(location_ids))
        if grants is not None:
            access = replace(access, override=grants)
        self.users[user_id] = access


class FakeAdminGateway:
    """In-memory AdminGateway."""

    def __init__(self) -> None:
        self.catalog = FakeCatalogRepository()
        self.roles = FakeRoleRepository()
        self.role_presets = FakeRolePresetRepository()
        self.users = FakeUserRepository()


# --- Fixtures ---


@pytest.fixture
def fake_gateway() -> FakeAdminGateway:
    """Fresh in-memory gateway for each test."""
    return FakeAdminGateway()


@pytest.fixture
def gateway_factory(fake_gateway: FakeAdminGateway):
    """Factory returning async context manager yielding the test's gateway."""

    @asynccontextmanager
    async def _factory():
        yield fake_gateway

    return _factory

