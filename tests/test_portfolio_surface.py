from fastapi.testclient import TestClient

from app.main import app
from app.services.quote_service import QUOTES

client = TestClient(app)


def _registered_paths() -> set[str]:
    paths = {getattr(route, "path", None) for route in app.routes}
    paths.update(app.openapi()["paths"])
    paths.discard(None)
    return paths


def test_portfolio_routes_are_registered() -> None:
    paths = _registered_paths()

    assert "/v1/health" in paths
    assert "/v1/tools" in paths
    assert "/v1/tools/{action}" in paths
    assert "/v1/assistant/openai" in paths
    assert "/v1/assistant/claude" in paths
    assert "/v1/assistant/profile" in paths
    assert "/v1/contact" in paths
    assert "/v1/projects" in paths
    assert "/v1/visits" in paths
    assert "/v1/profile" in paths
    assert "/v1/quote" in paths


def test_recruiter_and_analytics_routes_are_absent() -> None:
    paths = _registered_paths()

    assert not any(path.startswith("/v1/recruiter") for path in paths)
    assert not any(path.startswith("/v1/analytics") for path in paths)


def test_health_endpoint_returns_healthy() -> None:
    response = client.get("/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_profile_endpoint_serves_static_record() -> None:
    response = client.get("/v1/profile")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Sudharsan Srinivasan"
    assert body["skills"][0]["category"] == "Languages"
    assert any(job["company"] == "Merch" for job in body["experience"])


def test_quote_endpoint() -> None:
    response = client.get("/v1/quote")

    assert response.status_code == 200
    body = response.json()
    assert body["quote"] in QUOTES
    assert body["timestamp"].endswith("Z")


def test_unknown_route_uses_error_envelope() -> None:
    response = client.get("/v1/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_cors_preflight_for_configured_origin() -> None:
    response = client.options(
        "/v1/contact",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert "POST" in response.headers["access-control-allow-methods"]
