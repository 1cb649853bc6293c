from datetime import timedelta

import pytest
from sqlalchemy import select

from app.config import settings
from app.domain.services.auth_service import hash_token
from app.infrastructure.db.models import UserSessionModel


@pytest.mark.asyncio
@pytest.mark.integration
async def test_callback_requires_shared_secret(client):
    resp = await client.post(
        "/api/v1/auth/callback",
        json={"sub": "user-1"},
        headers={"X-Identity-Secret": "wrong"},
    )
    assert resp.status_code == 401

    resp = await client.post("/api/v1/auth/callback", json={"sub": "user-1"})
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_callback_issues_token_and_stores_only_hash(client, db_session):
    resp = await client.post(
        "/api/v1/auth/callback",
        json={"sub": "user-9", "email": "nine@example.com", "firstName": "Nine"},
        headers={"X-Identity-Secret": settings.IDENTITY_PROVIDER_SECRET},
    )
    assert resp.status_code == 200
    data = resp.json()
    token = data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == "user-9"
    assert data["user"]["first_name"] == "Nine"

    rows = (await db_session.execute(select(UserSessionModel))).scalars().all()
    assert len(rows) == 1
    assert rows[0].token_hash == hash_token(token)
    assert rows[0].token_hash != token


@pytest.mark.asyncio
@pytest.mark.integration
async def test_current_user(client, auth_headers):
    resp = await client.get("/api/v1/auth/user", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "one@example.com"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_repeat_sign_in_updates_profile(client, sign_in):
    await sign_in("user-1", "old@example.com")
    headers = await sign_in("user-1", "new@example.com")

    resp = await client.get("/api/v1/auth/user", headers=headers)
    assert resp.json()["email"] == "new@example.com"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_missing_or_unknown_token_is_unauthorized(client):
    resp = await client.get("/api/v1/auth/user")
    assert resp.status_code == 401

    resp = await client.get("/api/v1/auth/user", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Unauthorized"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_expired_token_is_unauthorized(client, db_session, auth_headers):
    record = (await db_session.execute(select(UserSessionModel))).scalar_one()
    record.expires_at = record.expires_at - timedelta(hours=settings.SESSION_TTL_HOURS + 1)
    await db_session.commit()

    resp = await client.get("/api/v1/auth/user", headers=auth_headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_logout_revokes_token(client, auth_headers):
    resp = await client.post("/api/v1/auth/logout", headers=auth_headers)
    assert resp.status_code == 204

    resp = await client.get("/api/v1/auth/user", headers=auth_headers)
    assert resp.status_code == 401
