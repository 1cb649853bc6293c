"""
User Repository
Simple upsert + fetch for identity-provider users.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models import User
from app.infrastructure.db.models import UserModel
from app.utils.time import now_utc_naive


class UserRepository:
    """Repository for users"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str) -> Optional[User]:
        model = await self.session.get(UserModel, user_id)
        return self._to_domain(model) if model else None

    async def upsert(self, user: User) -> User:
        """Insert the user or refresh every profile field"""
        now = now_utc_naive()
        existing = await self.session.get(UserModel, user.id)
        if existing:
            existing.email = user.email
            existing.first_name = user.first_name
            existing.last_name = user.last_name
            existing.profile_image_url = user.profile_image_url
            existing.updated_at = now
            await self.session.flush()
            return self._to_domain(existing)

        record = UserModel(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_image_url=user.profile_image_url,
            created_at=now,
            updated_at=now,
        )
        self.session.add(record)
        await self.session.flush()
        return self._to_domain(record)

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            profile_image_url=model.profile_image_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
