import pytest
from httpx import AsyncClient

from app.services.token_service import TokenIssuer


# ─────────────────────────────────────────────────────────────
# /Login
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_login_success(async_client: AsyncClient, create_test_user, token_issuer: TokenIssuer):
    user = await create_test_user(username="carol", password="secret1!")

    resp = await async_client.post("/api/Auth/Login", json={"username": "carol", "password": "secret1!"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Login successful"
    assert token_issuer.decode(data["token"]).user_id == user.id


@pytest.mark.anyio
async def test_login_wrong_password(async_client: AsyncClient, create_test_user):
    await create_test_user(username="dave", password="secret1!")

    resp = await async_client.post("/api/Auth/Login", json={"username": "dave", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid username or password"


@pytest.mark.anyio
async def test_login_unknown_user_matches_wrong_password(async_client: AsyncClient, create_test_user):
    await create_test_user(username="erin", password="secret1!")

    wrong_password = await async_client.post("/api/Auth/Login", json={"username": "erin", "password": "bad"})
    unknown_user = await async_client.post("/api/Auth/Login", json={"username": "ghost", "password": "bad"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


@pytest.mark.anyio
async def test_registered_user_can_log_in(async_client: AsyncClient):
    reg = await async_client.post(
        "/api/Auth/Register",
        json={"username": "frank", "email": "frank@example.com", "password": "secret1!"},
    )
    assert reg.status_code == 200

    resp = await async_client.post("/api/Auth/Login", json={"username": "frank", "password": "secret1!"})
    assert resp.status_code == 200
    assert resp.json()["token"]
