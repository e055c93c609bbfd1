"""Application entry point and composition root."""

import argparse
import asyncio
import json
import logging
import sys

import falcon
import falcon.asgi

from permatrix import __version__
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
from permatrix.config import Settings, get_settings
from permatrix.infrastructure.admin_api.client import AdminApiClient
from permatrix.infrastructure.admin_api.gateway import create_gateway_factory
from permatrix.infrastructure.sessions.memory_registry import InMemorySessionRegistry
from permatrix.interfaces.api.middleware.client_lifespan import ClientLifespanMiddleware
from permatrix.interfaces.api.middleware.cors import CORSMiddleware
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
from permatrix.interfaces.api.serializers import cascade_report
from permatrix.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _create_client(settings: Settings) -> AdminApiClient:
    return AdminApiClient(
        base_url=settings.admin_api_url,
        token=settings.admin_api_token,
        timeout=settings.admin_api_timeout,
    )


def create_permatrix_app(
    settings: Settings | None = None,
    client: AdminApiClient | None = None,
) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    client = client or _create_client(settings)
    gateway_factory = create_gateway_factory(client)

    resolver = RolePresetResolver(gateway_factory)
    propagator = BulkCascadePropagator(
        gateway_factory=gateway_factory,
        resolver=resolver,
        concurrency=settings.cascade_concurrency,
    )
    load_catalog = LoadCatalogUseCase(gateway_factory=gateway_factory)
    list_roles = ListAssignableRolesUseCase(gateway_factory=gateway_factory)
    load_user_access = LoadUserAccessUseCase(gateway_factory=gateway_factory)
    save_preset = SaveRolePresetUseCase(
        gateway_factory=gateway_factory,
        propagator=propagator,
    )
    registry = InMemorySessionRegistry(
        resolver,
        ttl_seconds=settings.session_ttl,
        max_sessions=settings.session_max,
    )

    health_resource = HealthResource(probe=lambda: client.get("/actions"))
    role_preset_resource = RolePresetResource(save_preset)

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins),
            ClientLifespanMiddleware(client),
        ],
    )

    async def log_exception(req, resp, ex, params):
        logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
        resp.status = falcon.HTTP_500
        resp.media = {"title": "500 Internal Server Error"}

    app.add_error_handler(Exception, log_exception)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/catalog", CatalogResource(load_catalog))
    app.add_route("/v1/roles/assignable", AssignableRolesResource(list_roles))
    app.add_route("/v1/role-presets", RolePresetsResource(save_preset))
    app.add_route("/v1/role-presets/{preset_id}", role_preset_resource)
    app.add_route("/v1/roles/{role_id}/defaults", RoleDefaultsResource(resolver))
    app.add_route("/v1/roles/{role_id}/cascade", RoleCascadeResource(propagator))
    app.add_route("/v1/sessions", SessionsResource(registry, load_user_access))
    app.add_route("/v1/sessions/{session_id}", SessionResource(registry))
    app.add_route("/v1/sessions/{session_id}/role", SessionRoleResource(registry))
    app.add_route(
        "/v1/sessions/{session_id}/locations", SessionLocationsResource(registry)
    )
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


async def run_cascade(
    settings: Settings,
    role_id: int,
    user_ids: list[int],
    apply_permissions: bool,
    apply_locations: bool,
) -> dict:
    """One-off cascade outside the service; returns the report."""
    client = _create_client(settings)
    try:
        gateway_factory = create_gateway_factory(client)
        propagator = BulkCascadePropagator(
            gateway_factory=gateway_factory,
            resolver=RolePresetResolver(gateway_factory),
            concurrency=settings.cascade_concurrency,
        )
        outcomes = await propagator.cascade(
            role_id, user_ids, apply_permissions, apply_locations
        )
    finally:
        await client.aclose()
    return cascade_report(outcomes)


def _parse_ids(value: str) -> list[int]:
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated ids, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="permatrix", description="Permission matrix engine")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("version", help="Print version")

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    cascade = sub.add_parser("cascade", help="Push a role preset to users")
    cascade.add_argument("--role-id", type=int, required=True)
    cascade.add_argument("--users", type=_parse_ids, required=True, help="e.g. 12,15,18")
    cascade.add_argument("--permissions", action="store_true", help="Apply grants")
    cascade.add_argument("--locations", action="store_true", help="Apply locations")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    if args.command == "version":
        print(f"permatrix v{__version__}")
        return 0

    if args.command == "serve":
        import uvicorn

        uvicorn.run(create_permatrix_app(settings), host=args.host, port=args.port)
        return 0

    report = asyncio.run(
        run_cascade(
            settings,
            args.role_id,
            args.users,
            apply_permissions=args.permissions,
            apply_locations=args.locations,
        )
    )
    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if report["failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
