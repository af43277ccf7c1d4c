"""
Health check tests for the API.
"""
from fastapi.testclient import TestClient


def test_health_check(client: TestClient):
    """Test that health endpoint returns 200 OK."""
    response = client.get("/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_readiness_reports_database_and_environment(client: TestClient):
    response = client.get("/v1/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["environment"] == "production"
    assert data["checks"]["database"]["status"] == "ok"
    assert data["request_id"]


def test_request_id_header_echoed(client: TestClient):
    response = client.get("/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_root(client: TestClient):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Bible Trivia Content API"


def test_content_environment_header(client: TestClient):
    response = client.get("/v1/health")
    assert response.headers["X-Content-Environment"] == "production"
    assert response.headers["X-Request-ID"]
