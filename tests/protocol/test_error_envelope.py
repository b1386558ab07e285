from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from termchess.engine.errors import SaveFailed
from termchess.protocol.http.app import create_app


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app()

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=400, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"]


def test_save_failed_maps_to_server_error() -> None:
    app: FastAPI = create_app()

    @app.get("/disk")
    def disk():  # type: ignore[no-redef]
        raise SaveFailed("disk full")

    client = TestClient(app)
    r = client.get("/disk")
    assert r.status_code == 500
    err = r.json()["error"]
    assert err["code"] == "save_failed"
    assert err["type"] == "server_error"
    assert err["message"] == "Failed to save game to file: disk full"


def test_unknown_route_uses_envelope() -> None:
    client = TestClient(create_app())
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"
