"""
API tests for health probes and the error envelope on unknown routes.
"""
import pytest

from album_api.routers import health
from album_api.utils.prometheus_metrics import ready


@pytest.fixture
def ready_app():
    ready.set(1)
    yield
    ready.set(0)


async def _ok():
    return None


async def _down():
    raise ConnectionError("refused")


class TestHealth:

    def test_liveness_when_ready(self, client, ready_app):
        response = client.get("/health/liveness")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    def test_liveness_when_shutting_down(self, client):
        ready.set(0)
        assert client.get("/health/liveness").status_code == 503

    def test_health_with_both_stores_up(self, client, ready_app, monkeypatch):
        monkeypatch.setattr(health, "check_sql", _ok)
        monkeypatch.setattr(health, "check_mongo", _ok)

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["database"] == {"status": "up"}
        assert body["checks"]["credential_store"] == {"status": "up"}

    def test_health_with_credential_store_down(self, client, ready_app, monkeypatch):
        monkeypatch.setattr(health, "check_sql", _ok)
        monkeypatch.setattr(health, "check_mongo", _down)

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["checks"]["credential_store"] == {
            "status": "down",
            "error": "ConnectionError",
        }


class TestErrorEnvelope:

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Requested resource /nope does not exist"}

    def test_root_reports_name_and_version(self, client):
        body = client.get("/").json()
        assert body["name"] == "Album API"
        assert body["version"] == "1.0.0"
