# tests/test_obs/test_error_mapper.py
import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.core.exception_handlers import resolve_status
from app.core.exceptions import (
    AuthorizationDeniedError,
    BadInputError,
    ConfigurationError,
    NotFoundError,
    UnauthenticatedError,
)
from app.main import create_app
from tests.fixtures.settings import build_test_settings


@pytest.mark.parametrize(
    "exc, expected",
    [
        (NotFoundError("gone"), (404, "gone")),
        (UnauthenticatedError("who?"), (401, "who?")),
        (AuthorizationDeniedError("not yours"), (403, "not yours")),
        (BadInputError("bad"), (400, "bad")),
        (ValueError("bad value"), (400, "bad value")),
        (HTTPException(status_code=405, detail="Method Not Allowed"), (405, "Method Not Allowed")),
        (ConfigurationError("JWT_SECRET_KEY is not configured"), (500, "Internal server error.")),
        (RuntimeError("kaboom"), (500, "Internal server error.")),
        (KeyError("x"), (500, "Internal server error.")),
    ],
)
def test_resolve_status_table(exc, expected):
    assert resolve_status(exc) == expected


def _mk_client(env: str) -> TestClient:
    app = create_app(build_test_settings(ENV=env))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    @app.get("/bad-value")
    async def bad_value():
        raise ValueError("count must be positive")

    @app.get("/not-found")
    async def not_found():
        raise NotFoundError("No such thing.", details={"id": 1})

    return TestClient(app)


def test_unexpected_error_is_500_envelope_in_production():
    resp = _mk_client("production").get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"statusCode": 500, "message": "Internal server error.", "details": None}
    assert "x-request-id" in resp.headers


def test_unexpected_error_includes_traceback_in_development():
    resp = _mk_client("development").get("/boom")
    body = resp.json()
    assert resp.status_code == 500
    assert body["message"] == "Internal server error."
    assert "secret internals" in body["details"]


def test_value_error_is_400():
    resp = _mk_client("production").get("/bad-value")
    assert resp.status_code == 400
    assert resp.json()["message"] == "count must be positive"


def test_app_error_details_only_in_development():
    dev = _mk_client("development").get("/not-found").json()
    prod = _mk_client("production").get("/not-found").json()
    assert dev == {"statusCode": 404, "message": "No such thing.", "details": {"id": 1}}
    assert prod["details"] is None


def test_unknown_route_uses_envelope():
    resp = _mk_client("production").get("/definitely/not/here")
    assert resp.status_code == 404
    assert resp.json()["statusCode"] == 404


def test_missing_signing_key_is_500_not_401():
    app = create_app(build_test_settings(ENV="production", JWT_SECRET_KEY=None))
    resp = TestClient(app).get("/api/Movies/GetAllMovies", headers={"Authorization": "Bearer x.y.z"})
    assert resp.status_code == 500
    assert resp.json()["message"] == "Internal server error."
