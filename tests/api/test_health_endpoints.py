"""API-level tests for the probe endpoints."""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from healthprobe.config import Settings
from healthprobe.main import create_app
from healthprobe.models.health import ProbeKind
from tests.helpers import FakeClock, hanging_check, make_check


@pytest.fixture
def make_client(settings):
    clients = []

    def _make(*checks, app_settings: Settings | None = None, clock: FakeClock | None = None) -> TestClient:
        app = create_app(app_settings or settings, checks=list(checks), clock=clock)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


class TestLiveness:
    def test_up(self, make_client):
        client = make_client(make_check("database"))

        response = client.get("/health/live")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "UP"
        assert data["service"] == "user-api"
        assert data["check"] == "liveness"
        datetime.fromisoformat(data["timestamp"])
        assert set(data) == {"status", "timestamp", "service", "check"}

    def test_up_with_all_dependencies_down(self, make_client):
        client = make_client(make_check("database", False), make_check("backend", ConnectionError("refused")))

        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "UP"

    def test_serialization_failure_returns_503(self, make_client):
        client = make_client()

        class BrokenResult:
            http_status = 200
            check = ProbeKind.LIVENESS

            def to_body(self):
                raise TypeError("Object of type bytes is not JSON serializable")

        class BrokenReporter:
            def liveness(self):
                return BrokenResult()

        client.app.state.health_reporter = BrokenReporter()

        response = client.get("/health/live")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "DOWN"
        assert data["check"] == "liveness"
        assert data["service"] == "user-api"
        assert "not JSON serializable" in data["error"]


class TestReadiness:
    def test_up(self, make_client):
        client = make_client(make_check("database"), make_check("cache"))

        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "UP"
        assert data["check"] == "readiness"
        assert data["checks"] == {"database": "UP", "cache": "UP"}

    def test_storage_up_downstream_down(self, make_client):
        client = make_client(make_check("storage", True), make_check("downstream", False))

        response = client.get("/health/ready")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "DOWN"
        assert data["checks"]["storage"] == "UP"
        assert data["checks"]["downstream"] == "DOWN"

    def test_timeout_reported_as_down(self, make_client):
        client = make_client(hanging_check("downstream", timeout=0.05), make_check("storage"))

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["checks"] == {"downstream": "DOWN", "storage": "UP"}

    def test_gated_until_warmup_elapses(self, make_client, settings):
        clock = FakeClock()
        client = make_client(
            make_check("database"),
            app_settings=settings.model_copy(update={"warmup_grace_seconds": 2.0}),
            clock=clock,
        )

        first = client.get("/health/ready")
        assert first.status_code == 503
        assert first.json()["checks"] == {"database": "UP"}

        clock.advance(2.0)

        second = client.get("/health/ready")
        assert second.status_code == 200
        assert second.json()["status"] == "UP"


class TestHealth:
    def test_composite_document(self, make_client):
        client = make_client(make_check("database"))

        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "UP"
        assert data["check"] == "health"
        assert data["service"] == "user-api"
        assert data["version"] == "9.9.9"
        assert data["uptime"] > 0
        assert isinstance(data["memory"]["used"], int)
        assert data["memory"]["used"] <= data["memory"]["total"]
        assert data["checks"] == {"database": "UP"}

    def test_down_mirrors_readiness(self, make_client):
        client = make_client(make_check("database", RuntimeError("pool exhausted")))

        response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "DOWN"
        assert data["checks"] == {"database": "DOWN"}
        assert "version" in data
        assert "memory" in data


class TestProfiles:
    def test_api_profile_with_storage(self, settings):
        app_settings = settings.model_copy(
            update={"service_profile": "admin-api", "service_name": "admin-api", "storage_dsn": "sqlite+aiosqlite:///:memory:"}
        )

        with TestClient(create_app(app_settings)) as client:
            response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"] == {"database": "UP"}

    def test_ui_profile_with_unreachable_backend(self, settings):
        app_settings = settings.model_copy(
            update={
                "service_profile": "user-ui",
                "service_name": "user-ui",
                "backend_url": "http://127.0.0.1:9",
                "backend_timeout_seconds": 0.5,
            }
        )

        with TestClient(create_app(app_settings)) as client:
            live = client.get("/health/live")
            ready = client.get("/health/ready")

        assert live.status_code == 200
        assert ready.status_code == 503
        assert ready.json()["service"] == "user-ui"
        assert ready.json()["checks"] == {"backend_connectivity": "DOWN"}

    def test_api_profile_opens_no_http_client(self, settings):
        app_settings = settings.model_copy(
            update={"service_profile": "user-api", "storage_dsn": "sqlite+aiosqlite:///:memory:"}
        )

        with patch("healthprobe.main.httpx.AsyncClient") as client_cls:
            with TestClient(create_app(app_settings)) as client:
                assert client.get("/health/ready").status_code == 200

        client_cls.assert_not_called()

    def test_ui_profile_opens_http_client(self, settings):
        app_settings = settings.model_copy(update={"service_profile": "admin-ui", "service_name": "admin-ui"})

        with patch("healthprobe.main.httpx.AsyncClient") as client_cls:
            client_cls.return_value.aclose = AsyncMock()
            with TestClient(create_app(app_settings)):
                pass

        client_cls.assert_called_once_with(timeout=app_settings.backend_timeout_seconds)
        client_cls.return_value.aclose.assert_awaited_once()
