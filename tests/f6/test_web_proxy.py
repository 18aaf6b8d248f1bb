"""Tests for the same-origin proxy app."""

import json

import httpx
import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from academy.config.app_config import AppConfig, ProxyConfig
from academy.web.api import create_app
from academy.web.routes.proxy import forward_headers

BACKEND_URL = "http://backend.test"


def _config() -> AppConfig:
    return AppConfig(proxy=ProxyConfig(backend_url=BACKEND_URL))


@pytest.fixture
def client(backend):
    """Proxy app forwarding to the fake backend."""
    app = create_app(_config(), transport=backend.transport())
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["backend_url"] == BACKEND_URL
        assert "timestamp" in data


class TestProxy:
    """Tests for /api forwarding."""

    def test_get_forwards_path_and_query(self, client, backend):
        backend.add("GET", "/api/users", {"users": []})

        response = client.get("/api/users?role=teacher&page=2")

        assert response.status_code == 200
        assert response.json() == {"users": []}
        assert dict(backend.last.url.params) == {"role": "teacher", "page": "2"}

    def test_post_forwards_body_and_headers(self, client, backend):
        backend.add("POST", "/api/auth/login", {"token": "t"})

        client.post(
            "/api/auth/login",
            json={"email": "a@example.com"},
            headers={"Authorization": "Bearer abc"},
        )

        forwarded = backend.last
        assert forwarded.method == "POST"
        assert json.loads(forwarded.content) == {"email": "a@example.com"}
        assert forwarded.headers["authorization"] == "Bearer abc"
        assert forwarded.headers["host"] == "backend.test"

    @pytest.mark.parametrize("method", ["PUT", "PATCH", "DELETE"])
    def test_other_methods(self, client, backend, method):
        backend.add(method, "/api/lessons/l1", {"ok": True})

        response = client.request(method, "/api/lessons/l1")

        assert response.status_code == 200
        assert backend.last.method == method

    def test_backend_status_is_verbatim(self, client, backend):
        backend.add("GET", "/api/payments/p1", {"message": "Forbidden"}, status=403)

        response = client.get("/api/payments/p1")

        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden"}

    def test_backend_unreachable(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        app = create_app(_config(), transport=httpx.MockTransport(refuse))
        with TestClient(app) as client:
            response = client.get("/api/users")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Proxy error",
            "details": "connection refused",
        }

    def test_non_api_paths_not_proxied(self, client, backend):
        response = client.get("/static/app.js")

        assert response.status_code == 404
        assert backend.requests == []


class TestForwardHeaders:
    """Tests for the forwarded header set."""

    def test_hop_by_hop_headers_dropped(self):
        request = Request(
            {
                "type": "http",
                "headers": [
                    (b"host", b"localhost:8000"),
                    (b"content-length", b"10"),
                    (b"transfer-encoding", b"chunked"),
                    (b"connection", b"keep-alive"),
                    (b"authorization", b"Bearer abc"),
                    (b"x-request-id", b"r-1"),
                ],
            }
        )

        assert forward_headers(request) == {
            "authorization": "Bearer abc",
            "x-request-id": "r-1",
        }
