"""Fixtures for API tests."""

import falcon.asgi
import pytest

from permatrix.application.services.bulk_cascade import BulkCascadePropagator
from permatrix.application.services.role_preset_resolver import RolePresetResolver
from permatrix.application.use_cases.catalog.load_catalog import LoadCatalogUseCase
from permatrix.application.use_cases.role.list_assignable_roles import (
    ListAssignableRolesUseCase,
)
from permatrix.application.use_cases.role_preset.save_role_preset import (
    SaveRolePresetUseCase,
)
from permatrix.application.use_cases.user.load_user_access import LoadUserAccessUseCase
from permatrix.infrastructure.sessions.memory_registry import InMemorySessionRegistry

from tests.conftest import EDIT, LOCATIONS, USERS, VIEW, FakeAdminGateway


@pytest.fixture
def seeded_gateway(fake_gateway: FakeAdminGateway) -> FakeAdminGateway:
    """Gateway with presets for roles 3 and 5 and a few users."""
    fake_gateway.role_presets.add_preset(3, [1], {USERS: [VIEW]})
    fake_gateway.role_presets.add_preset(5, [2, 3], {USERS: [VIEW, EDIT], LOCATIONS: [VIEW]})
    fake_gateway.users.add_user(12, role_id=5, location_ids=[9], mapping={USERS: [EDIT]})
    fake_gateway.users.add_user(15, role_id=5, location_ids=[9], mapping={USERS: [EDIT]})
    fake_gateway.users.add_user(42, role_id=3, location_ids=[4], mapping={LOCATIONS: [EDIT]})
    return fake_gateway


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def session_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app(gateway_factory, seeded_gateway, session_clock: FakeClock):
    """Falcon ASGI app with API resources for testing."""
    resolver = RolePresetResolver(gateway_factory)
    propagator = BulkCascadePropagator(gateway_factory, resolver)
    load_catalog = LoadCatalogUseCase(gateway_factory)
    save_preset = SaveRolePresetUseCase(gateway_factory, propagator)
    registry = InMemorySessionRegistry(resolver, ttl_seconds=600, clock=session_clock)

    from permatrix.interfaces.api.resources.catalog import CatalogResource
    from permatrix.interfaces.api.resources.health import HealthResource
    from permatrix.interfaces.api.resources.role_presets import (
        RoleCascadeResource,
        RoleDefaultsResource,
        RolePresetResource,
        RolePresetsResource,
    )
    from permatrix.interfaces.api.resources.roles import AssignableRolesResource
    from permatrix.interfaces.api.resources.sessions import (
        SessionAccessResource,
        SessionLocationsResource,
        SessionPayloadResource,
        SessionResource,
        SessionRoleResource,
        SessionsResource,
        SessionToggleResource,
    )

    app = falcon.asgi.App()
    app.add_route("/v1/health", HealthResource())
    app.add_route("/v1/catalog", CatalogResource(load_catalog))
    app.add_route(
        "/v1/roles/assignable",
        AssignableRolesResource(ListAssignableRolesUseCase(gateway_factory)),
    )
    app.add_route("/v1/roles/{role_id}/defaults", RoleDefaultsResource(resolver))
    app.add_route("/v1/roles/{role_id}/cascade", RoleCascadeResource(propagator))
    app.add_route("/v1/role-presets", RolePresetsResource(save_preset))
    app.add_route("/v1/role-presets/{preset_id}", RolePresetResource(save_preset))
    app.add_route(
        "/v1/sessions",
        SessionsResource(registry, LoadUserAccessUseCase(gateway_factory)),
    )
    app.add_route("/v1/sessions/{session_id}", SessionResource(registry))
    app.add_route("/v1/sessions/{session_id}/role", SessionRoleResource(registry))
    app.add_route("/v1/sessions/{session_id}/locations", SessionLocationsResource(registry))
    app.add_route(
        "/v1/sessions/{session_id}/toggle",
        SessionToggleResource(registry, load_catalog),
    )
    app.add_route("/v1/sessions/{session_id}/payload", SessionPayloadResource(registry))
    app.add_route(
        "/v1/sessions/{session_id}/access",
        SessionAccessResource(registry, load_catalog),
    )
    return app


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)
