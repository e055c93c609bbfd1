"""Tests for the composition root and CLI."""

import httpx
import pytest
from falcon.testing import TestClient

from permatrix.config import Settings
from permatrix.infrastructure.admin_api.client import AdminApiClient
from permatrix.main import build_parser, create_permatrix_app


def _admin_api(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/role-presets/nested/5":
        return httpx.Response(200, json={
            "location_ids": [1],
            "presets": [{"module_ids": 10, "action_ids": [1]}],
        })
    if request.url.path == "/api/actions":
        return httpx.Response(200, json=[])
    return httpx.Response(404)


@pytest.fixture
def client() -> TestClient:
    settings = Settings(admin_api_url="http://admin.test/api", cors_origins="http://console.test")
    api = AdminApiClient(settings.admin_api_url, transport=httpx.MockTransport(_admin_api))
    return TestClient(create_permatrix_app(settings, api))


# Each simulated request runs the ASGI lifespan, which closes the admin API
# client on shutdown, so every test below issues a single request.


def test_app_wires_resolver_to_admin_api(client: TestClient) -> None:
    result = client.simulate_get("/v1/roles/5/defaults")
    assert result.status_code == 200
    assert result.json["presets"] == [{"module_ids": 10, "action_ids": [1]}]


def test_app_maps_missing_preset_to_404(client: TestClient) -> None:
    assert client.simulate_get("/v1/roles/6/defaults").status_code == 404


def test_app_sets_cors_headers(client: TestClient) -> None:
    result = client.simulate_get("/v1/health", headers={"Origin": "http://console.test"})
    assert result.headers["Access-Control-Allow-Origin"] == "http://console.test"


def test_app_ready_probe(client: TestClient) -> None:
    assert client.simulate_get("/v1/health/ready").status_code == 200


def test_cascade_cli_arguments() -> None:
    args = build_parser().parse_args(
        ["cascade", "--role-id", "5", "--users", "12,15,18", "--permissions"]
    )
    assert args.role_id == 5
    assert args.users == [12, 15, 18]
    assert args.permissions is True
    assert args.locations is False


def test_app_ignores_unknown_origin(client: TestClient) -> None:
    result = client.simulate_get("/v1/health", headers={"Origin": "http://evil.test"})
    assert "Access-Control-Allow-Origin" not in result.headers


def test_app_answers_preflight(client: TestClient) -> None:
    result = client.simulate_options(
        "/v1/sessions",
        headers={"Origin": "http://console.test", "Access-Control-Request-Method": "POST"},
    )
    assert result.status_code == 204
    assert "POST" in result.headers["Access-Control-Allow-Methods"]
    assert result.headers["Access-Control-Allow-Origin"] == "http://console.test"
