"""
Unit tests for the functions API endpoints.

Runs the real app factory with an in-memory service container.
"""

from io import BytesIO
from unittest.mock import Mock

import pytest
from redis.exceptions import RedisError

from bandvault.app_factory import AppConfig, create_app
from bandvault.application.dependency_container import DependencyContainer
from bandvault.application.file_serving_service import FileServingService
from bandvault.application.token_cleanup_service import TokenCleanupService
from bandvault.config.file_access_config import FileAccessConfig
from bandvault.domain.file_access.entities import Identity
from bandvault.domain.file_access.token_issuer import TokenIssuer

PATH = "bands/band-a/charts/song-1/lead.pdf"
SECRET = "edge-secret"


@pytest.fixture
def container(token_repository, storage_repository, clock):
    container = DependencyContainer()
    container.register_singleton(
        FileServingService, FileServingService(token_repository, storage_repository, clock=clock)
    )
    container.register_singleton(
        TokenCleanupService, TokenCleanupService(token_repository, clock=clock)
    )
    return container


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("EDGE_SECRET_KEY", SECRET)
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://app.example")
    app = create_app(AppConfig(FileAccessConfig()), container=container)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def issued(token_repository, storage_repository, clock):
    storage_repository.save(PATH, BytesIO(b"%PDF-1.7"))
    return TokenIssuer(token_repository, clock=clock).issue_one(PATH, Identity("user-1"), "band-a")


class TestServeFileInline:
    def test_streams_file_inline(self, client, issued):
        response = client.get(
            "/functions/v1/serve-file-inline", query_string={"path": PATH, "token": issued.token}
        )

        assert response.status_code == 200
        assert response.data == b"%PDF-1.7"
        assert response.mimetype == "application/pdf"
        assert response.headers["Content-Disposition"] == 'inline; filename="lead.pdf"'
        assert response.headers["Cache-Control"] == "private, no-store"

    def test_missing_token(self, client):
        response = client.get("/functions/v1/serve-file-inline", query_string={"path": PATH})

        assert response.status_code == 401
        body = response.get_json()
        assert body["error"] == "invalid_token"
        assert body["details"] == "Missing token parameter"

    def test_missing_path(self, client):
        response = client.get("/functions/v1/serve-file-inline")
        assert response.status_code == 400

    def test_token_for_other_file(self, client, issued):
        response = client.get(
            "/functions/v1/serve-file-inline",
            query_string={"path": "bands/band-a/charts/song-1/other.pdf", "token": issued.token},
        )
        assert response.status_code == 403

    def test_reuse_after_grace_period(self, client, issued, clock):
        query = {"path": PATH, "token": issued.token}
        assert client.get("/functions/v1/serve-file-inline", query_string=query).status_code == 200
        clock.advance(seconds=31)
        assert client.get("/functions/v1/serve-file-inline", query_string=query).status_code == 401

    def test_unexpected_error_is_500(self, client, container):
        broken = Mock()
        broken.serve.side_effect = RuntimeError("boom")
        container.register_singleton(FileServingService, broken)

        response = client.get(
            "/functions/v1/serve-file-inline", query_string={"path": PATH, "token": "t"}
        )
        assert response.status_code == 500
        assert response.get_json()["error"] == "system_error"

    def test_cors_header_for_allowed_origin(self, client, issued):
        response = client.get(
            "/functions/v1/serve-file-inline",
            query_string={"path": PATH, "token": issued.token},
            headers={"Origin": "https://app.example"},
        )
        assert response.headers["Access-Control-Allow-Origin"] == "https://app.example"


class TestCleanupExpiredTokens:
    def test_requires_secret(self, client):
        response = client.post("/functions/v1/cleanup-expired-tokens")
        assert response.status_code == 401
        assert response.get_json()["error"] == "unauthorized"

    def test_wrong_secret(self, client):
        response = client.post(
            "/functions/v1/cleanup-expired-tokens", headers={"x-edge-secret": "nope"}
        )
        assert response.status_code == 401

    def test_unset_secret_refuses_everything(self, monkeypatch, container):
        monkeypatch.delenv("EDGE_SECRET_KEY", raising=False)
        client = create_app(AppConfig(FileAccessConfig()), container=container).test_client()

        response = client.post("/functions/v1/cleanup-expired-tokens", headers={"x-edge-secret": ""})
        assert response.status_code == 401

    def test_deletes_stale_tokens(self, client, issued, clock, token_repository):
        clock.advance(hours=2)

        response = client.post(
            "/functions/v1/cleanup-expired-tokens", headers={"x-edge-secret": SECRET}
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert body["deletedCount"] == 1
        assert body["timestamp"] == clock.now.isoformat()
        assert token_repository.get(issued.token) is None

    def test_store_failure_is_500(self, client, container):
        broken = Mock()
        broken.cleanup.side_effect = RedisError("down")
        container.register_singleton(TokenCleanupService, broken)

        response = client.post(
            "/functions/v1/cleanup-expired-tokens", headers={"x-edge-secret": SECRET}
        )
        assert response.status_code == 500

    def test_missing_container_is_json_500(self, app):
        app.container = None

        response = app.test_client().post(
            "/functions/v1/cleanup-expired-tokens", headers={"x-edge-secret": SECRET}
        )

        assert response.status_code == 500
        assert response.get_json()["error"] == "system_error"


class TestHealth:
    def test_degraded_without_redis(self, client, monkeypatch):
        monkeypatch.setattr("bandvault.app_factory.redis_health_check", lambda: False)

        response = client.get("/health")

        assert response.status_code == 503
        body = response.get_json()
        assert body["redis"] == "disconnected"
        assert body["services"] == "available"

    def test_ok_when_dependencies_available(self, client, monkeypatch):
        monkeypatch.setattr("bandvault.app_factory.redis_health_check", lambda: True)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"
