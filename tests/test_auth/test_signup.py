import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from app.db.models.user import User
from app.repositories.users import UserRepository
from app.schemas.auth import RegisterRequest
from app.services.auth.signup_service import register
from app.services.token_service import TokenIssuer


def _payload(username: str = "newuser", password: str = "secret1!") -> dict:
    return {"username": username, "email": f"{username}@example.com", "password": password}


# ─────────────────────────────────────────────────────────────
# /Register (HTTP)
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_register_success_returns_token(async_client: AsyncClient, token_issuer: TokenIssuer):
    resp = await async_client.post("/api/Auth/Register", json=_payload())
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Registration successful"
    assert token_issuer.decode(data["token"]).user_id > 0
    assert resp.headers["cache-control"] == "no-store"


@pytest.mark.anyio
async def test_register_duplicate_username(async_client: AsyncClient, token_issuer: TokenIssuer):
    first = await async_client.post("/api/Auth/Register", json=_payload("dupe"))
    assert first.status_code == 200

    second = await async_client.post("/api/Auth/Register", json=_payload("dupe"))
    assert second.status_code == 400
    body = second.json()
    assert body["statusCode"] == 400
    assert body["message"] == "Username already exists"

    # The first account's token is unaffected.
    assert token_issuer.decode(first.json()["token"]).sub


@pytest.mark.anyio
async def test_register_weak_password_reports_all_rules(async_client: AsyncClient, db_session):
    resp = await async_client.post("/api/Auth/Register", json=_payload("weakling", "ABCDEF"))
    assert resp.status_code == 400
    assert resp.json()["message"] == (
        "Passwords must have at least one non alphanumeric character., "
        "Passwords must have at least one digit ('0'-'9')., "
        "Passwords must have at least one lowercase ('a'-'z')."
    )
    count = (await db_session.execute(select(func.count(User.id)))).scalar_one()
    assert count == 0


@pytest.mark.anyio
async def test_register_rejects_invalid_email(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/Auth/Register", json={"username": "mailless", "email": "not-an-email", "password": "secret1!"}
    )
    assert resp.status_code == 400
    assert resp.json()["statusCode"] == 400


# ─────────────────────────────────────────────────────────────
# signup_service.register (direct)
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_register_service_hashes_password(db_session, token_issuer: TokenIssuer):
    users = UserRepository(db_session)
    result = await register(
        RegisterRequest(username="hashme", email="hashme@example.com", password="secret1!"),
        users=users,
        tokens=token_issuer,
    )
    assert result.success is True

    stored = await users.find_by_username("hashme")
    assert stored is not None
    assert stored.hashed_password != "secret1!"
    assert users.verify_password(stored, "secret1!")


@pytest.mark.anyio
async def test_register_short_password(async_client: AsyncClient):
    resp = await async_client.post("/api/Auth/Register", json=_payload("shorty", "ab1!"))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Passwords must be at least 6 characters."


@pytest.mark.anyio
async def test_register_requires_non_alphanumeric(async_client: AsyncClient):
    resp = await async_client.post("/api/Auth/Register", json=_payload("plainpw", "secret1"))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Passwords must have at least one non alphanumeric character."
