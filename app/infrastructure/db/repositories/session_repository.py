"""
Session Repository
Bearer sessions keyed by token hash.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models import UserSessionModel


class SessionRepository:
    """Repository for user sessions"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        user_id: str,
        token_hash: str,
        expires_at: datetime
    ) -> UserSessionModel:
        record = UserSessionModel(
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        self.session.add(record)
        await self.session.flush()
        return record

    async def get_active(self, token_hash: str, now: datetime) -> Optional[UserSessionModel]:
        result = await self.session.execute(
            select(UserSessionModel).where(
                UserSessionModel.token_hash == token_hash,
                UserSessionModel.expires_at > now,
            )
        )
        return result.scalar_one_or_none()

    async def delete(self, token_hash: str) -> bool:
        result = await self.session.execute(
            delete(UserSessionModel).where(UserSessionModel.token_hash == token_hash)
        )
        return (result.rowcount or 0) > 0

    async def delete_expired(self, now: datetime) -> int:
        result = await self.session.execute(
            delete(UserSessionModel).where(UserSessionModel.expires_at <= now)
        )
        return result.rowcount or 0
