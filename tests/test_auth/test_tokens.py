from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.exceptions import ConfigurationError, UnauthenticatedError
from app.db.models.user import User
from app.services.token_service import TokenIssuer
from tests.fixtures.settings import TEST_JWT_SECRET, build_test_settings


def _user(user_id: int = 7) -> User:
    return User(id=user_id, username="tok", email="tok@example.com", hashed_password="x")


def test_token_carries_expected_claims(token_issuer: TokenIssuer):
    token = token_issuer.issue(_user(7))
    claims = jwt.get_unverified_claims(token)

    assert claims["sub"] == "7"
    assert claims["nameid"] == "7"
    assert claims["iss"] == "MovieReview"
    assert claims["aud"] == "MovieReviewUsers"
    assert claims["jti"]
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_each_token_has_unique_jti(token_issuer: TokenIssuer):
    a = token_issuer.decode(token_issuer.issue(_user()))
    b = token_issuer.decode(token_issuer.issue(_user()))
    assert a.jti != b.jti


def test_missing_secret_fails_loudly():
    issuer = TokenIssuer.from_settings(build_test_settings(JWT_SECRET_KEY=None))
    with pytest.raises(ConfigurationError):
        issuer.issue(_user())


def test_blank_secret_counts_as_missing():
    issuer = TokenIssuer.from_settings(build_test_settings(JWT_SECRET_KEY="   "))
    with pytest.raises(ConfigurationError):
        issuer.issue(_user())


def test_expired_token_rejected(token_issuer: TokenIssuer):
    long_ago = datetime.now(timezone.utc) - timedelta(days=2)
    token = token_issuer.issue(_user(), now=long_ago)
    with pytest.raises(UnauthenticatedError):
        token_issuer.decode(token)


def test_wrong_audience_rejected(token_issuer: TokenIssuer):
    other = TokenIssuer(
        secret=TEST_JWT_SECRET,
        issuer="MovieReview",
        audience="SomeoneElse",
        expires_in=timedelta(hours=1),
    )
    with pytest.raises(UnauthenticatedError):
        token_issuer.decode(other.issue(_user()))


def test_wrong_signature_rejected(token_issuer: TokenIssuer):
    forged = TokenIssuer(
        secret="not-the-real-secret",
        issuer="MovieReview",
        audience="MovieReviewUsers",
        expires_in=timedelta(hours=1),
    )
    with pytest.raises(UnauthenticatedError):
        token_issuer.decode(forged.issue(_user()))


def test_token_without_jti_rejected(token_issuer: TokenIssuer):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "1", "iss": "MovieReview", "aud": "MovieReviewUsers", "exp": now + timedelta(hours=1)},
        TEST_JWT_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(UnauthenticatedError):
        token_issuer.decode(token)


def _signed(sub: str) -> str:
    now = datetime.now(timezone.utc)
    return jwt.encode(
        {
            "sub": sub,
            "jti": "j-1",
            "iss": "MovieReview",
            "aud": "MovieReviewUsers",
            "exp": now + timedelta(hours=1),
        },
        TEST_JWT_SECRET,
        algorithm="HS256",
    )


@pytest.mark.parametrize("sub", ["²", "١٢", "12a", "-3", "", str(2**63)])
def test_non_numeric_subject_rejected(token_issuer: TokenIssuer, sub):
    with pytest.raises(UnauthenticatedError):
        token_issuer.decode(_signed(sub))


@pytest.mark.anyio
async def test_superscript_subject_is_401_over_http(async_client):
    resp = await async_client.get(
        "/api/Movies/GetAllMovies", headers={"Authorization": f"Bearer {_signed('²')}"}
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid or expired token."


# ─────────────────────────────────────────────────────────────
# Bearer enforcement over HTTP
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
@pytest.mark.parametrize("path", ["/api/Movies/GetAllMovies", "/api/Reviews/GetByMovieId/1"])
async def test_protected_routes_require_token(async_client, path):
    resp = await async_client.get(path)
    assert resp.status_code == 401
    assert resp.json()["statusCode"] == 401
    assert resp.headers.get("www-authenticate") == "Bearer"


@pytest.mark.anyio
async def test_garbage_token_rejected(async_client):
    resp = await async_client.get("/api/Movies/GetAllMovies", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
