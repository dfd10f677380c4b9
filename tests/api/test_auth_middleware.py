"""Tests for bearer-token auth and the request context middleware.

Uses a minimal FastAPI app so the middleware is exercised on its own.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from warden.api.middleware import AuthMiddleware, RequestContextMiddleware
from warden.core.hashing import hash_secret
from warden.core.principal import Principal, PrincipalDirectory


def _make_app() -> FastAPI:
    principal = Principal.from_strings("svc-hr", ["create:employee"])
    app = FastAPI()
    app.add_middleware(
        AuthMiddleware,
        directory=PrincipalDirectory({hash_secret("tok"): principal}),
        public_paths=["/api/v1/docs", None],
    )
    app.add_middleware(RequestContextMiddleware)

    @app.get("/api/v1/whoami")
    def _whoami(request: Request):
        return {"identifier": request.state.principal.identifier}

    @app.get("/health/live")
    def _live():
        return {"status": "alive"}

    @app.get("/api/v1/docs")
    def _docs():
        return {"docs": True}

    @app.get("/api/v1/things/docs")
    def _thing_named_docs():
        return {"docs": False}

    @app.get("/healthcheck")
    def _lookalike():
        return {"status": "open"}

    return app


class TestAuthMiddleware:
    def test_valid_token(self):
        client = TestClient(_make_app())
        resp = client.get("/api/v1/whoami", headers={"Authorization": "Bearer tok"})
        assert resp.status_code == 200
        assert resp.json() == {"identifier": "svc-hr"}

    def test_scheme_is_case_insensitive(self):
        client = TestClient(_make_app())
        resp = client.get("/api/v1/whoami", headers={"Authorization": "bearer tok"})
        assert resp.status_code == 200

    def test_missing_header(self):
        resp = TestClient(_make_app()).get("/api/v1/whoami")
        assert resp.status_code == 401
        body = resp.json()
        assert body["title"] == "Unauthorized"
        assert body["status"] == 401

    def test_empty_token(self):
        resp = TestClient(_make_app()).get("/api/v1/whoami", headers={"Authorization": "Bearer "})
        assert resp.status_code == 401

    def test_health_bypassed(self):
        assert TestClient(_make_app()).get("/health/live").status_code == 200

    def test_docs_bypassed(self):
        assert TestClient(_make_app()).get("/api/v1/docs").status_code == 200

    def test_public_paths_match_exactly(self):
        client = TestClient(_make_app())
        assert client.get("/api/v1/things/docs").status_code == 401
        assert client.get("/healthcheck").status_code == 401
        assert client.get("/health/live/extra").status_code == 401


class TestRequestIdAndTiming:
    def test_request_id_generated(self):
        resp = TestClient(_make_app()).get("/health/live")
        assert resp.headers["X-Request-ID"]
        assert float(resp.headers["X-Process-Time-Ms"]) >= 0

    def test_request_id_propagated(self):
        resp = TestClient(_make_app()).get("/health/live", headers={"X-Request-ID": "req-42"})
        assert resp.headers["X-Request-ID"] == "req-42"

    def test_rejected_requests_still_carry_request_id(self):
        resp = TestClient(_make_app()).get("/api/v1/whoami")
        assert resp.status_code == 401
        assert resp.headers["X-Request-ID"]
