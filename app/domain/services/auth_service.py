"""
Auth Service
Issues and resolves opaque bearer sessions for identity-provider users.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import User
from app.infrastructure.db.repositories.session_repository import SessionRepository
from app.infrastructure.db.repositories.user_repository import UserRepository
from app.utils.time import now_utc_naive


@dataclass(frozen=True)
class IssuedSession:
    user: User
    token: str
    expires_at: datetime


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def mask_token(token: str) -> str:
    if not token:
        return ""
    if len(token) <= 8:
        return token[:2] + "..." + token[-2:]
    return token[:4] + "..." + token[-4:]


class AuthService:
    """Session service bound to one DB session"""

    def __init__(self, session: AsyncSession, ttl_hours: int):
        self.users = UserRepository(session)
        self.sessions = SessionRepository(session)
        self.ttl = timedelta(hours=ttl_hours)

    async def sign_in(self, user: User) -> IssuedSession:
        """Upsert the user and issue a fresh session token"""
        stored = await self.users.upsert(user)

        now = now_utc_naive()
        await self.sessions.delete_expired(now)

        token = secrets.token_urlsafe(32)
        expires_at = now + self.ttl
        await self.sessions.create(stored.id, hash_token(token), expires_at)
        return IssuedSession(user=stored, token=token, expires_at=expires_at)

    async def resolve(self, token: str) -> Optional[User]:
        """Return the user behind an active token, or None"""
        if not token:
            return None
        record = await self.sessions.get_active(hash_token(token), now_utc_naive())
        if record is None:
            return None
        return await self.users.get(record.user_id)

    async def sign_out(self, token: str) -> bool:
        return await self.sessions.delete(hash_token(token))
