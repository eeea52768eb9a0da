"""Tests for the standard error handlers and request ID middleware."""

import pytest
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from sparks_layout.layout import DragSession
from sparks_layout.middleware.error_handler import register_error_handlers
from sparks_layout.middleware.request_id import RequestIDMiddleware

pytestmark = pytest.mark.asyncio


def _make_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/missing")
    async def missing():
        raise HTTPException(status_code=404, detail="gone")

    @app.get("/double-drag")
    async def double_drag():
        session = DragSession()
        session.start_drag("A", "r1")
        session.start_drag("B", "r1")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaput")

    return app


async def _get(path: str, **kwargs):
    transport = ASGITransport(app=_make_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path, **kwargs)


async def test_http_exception_envelope():
    resp = await _get("/missing", headers={"X-Request-ID": "req-1"})
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] is True
    assert body["detail"] == "gone"
    assert body["request_id"] == "req-1"
    assert "timestamp" in body


async def test_invalid_state_is_conflict():
    resp = await _get("/double-drag")
    assert resp.status_code == 409
    assert "already being dragged" in resp.json()["detail"]


async def test_unhandled_exception_is_500():
    resp = await _get("/boom")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Internal server error"


async def test_request_id_generated():
    resp = await _get("/missing")
    assert resp.headers["X-Request-ID"]
