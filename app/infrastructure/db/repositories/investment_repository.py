"""
Investment Repository
CRUD operations for user-owned holdings

Every statement is scoped by user_id.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import Optional, List

from app.infrastructure.db.models import InvestmentModel
from app.domain.models import Investment, InvestmentData
from app.utils.time import now_utc_naive


class InvestmentNotFoundError(LookupError):
    """No investment with this id is owned by the user"""


class InvestmentRepository:
    """Repository for Investment"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def list_for_user(self, user_id: str) -> List[Investment]:
        """
        Get all investments owned by a user

        Args:
            user_id: Owning user ID

        Returns:
            Investments in creation order
        """
        result = await self.session.execute(
            select(InvestmentModel)
            .where(InvestmentModel.user_id == user_id)
            .order_by(InvestmentModel.created_at)
        )
        models = result.scalars().all()

        return [self._to_domain(m) for m in models]

    async def get(self, investment_id: str, user_id: str) -> Optional[Investment]:
        """
        Get one investment if owned by the user

        Args:
            investment_id: Investment ID
            user_id: Owning user ID

        Returns:
            Investment or None
        """
        model = await self._get_model(investment_id, user_id)
        return self._to_domain(model) if model else None

    async def create(self, user_id: str, data: InvestmentData) -> Investment:
        """
        Create new investment record (fields persisted verbatim)

        Args:
            user_id: Owning user ID
            data: Submitted investment fields

        Returns:
            Created Investment
        """
        now = now_utc_naive()
        model = InvestmentModel(
            user_id=user_id,
            symbol=data.symbol,
            company_name=data.company_name,
            quantity=data.quantity,
            purchase_price=data.purchase_price,
            current_price=data.current_price,
            purchase_date=data.purchase_date,
            created_at=now,
            updated_at=now,
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_domain(model)

    async def update(
        self,
        investment_id: str,
        user_id: str,
        data: InvestmentData
    ) -> Investment:
        """
        Replace all editable fields of an owned investment

        Args:
            investment_id: Investment ID
            user_id: Owning user ID
            data: Replacement fields

        Returns:
            Updated Investment

        Raises:
            InvestmentNotFoundError: No owned row matches
        """
        model = await self._get_model(investment_id, user_id)
        if model is None:
            raise InvestmentNotFoundError("Investment not found")

        model.symbol = data.symbol
        model.company_name = data.company_name
        model.quantity = data.quantity
        model.purchase_price = data.purchase_price
        model.current_price = data.current_price
        model.purchase_date = data.purchase_date
        model.updated_at = now_utc_naive()

        await self.session.flush()

        return self._to_domain(model)

    async def delete(self, investment_id: str, user_id: str) -> bool:
        """
        Delete an owned investment

        Deleting a missing or foreign row is a no-op.

        Returns:
            True if a row was removed
        """
        result = await self.session.execute(
            delete(InvestmentModel)
            .where(
                InvestmentModel.id == investment_id,
                InvestmentModel.user_id == user_id
            )
        )
        return (result.rowcount or 0) > 0

    async def _get_model(self, investment_id: str, user_id: str) -> Optional[InvestmentModel]:
        result = await self.session.execute(
            select(InvestmentModel)
            .where(
                InvestmentModel.id == investment_id,
                InvestmentModel.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: InvestmentModel) -> Investment:
        """Convert database model to domain entity"""
        return Investment(
            id=model.id,
            user_id=model.user_id,
            symbol=model.symbol,
            company_name=model.company_name,
            quantity=model.quantity,
            purchase_price=model.purchase_price,
            current_price=model.current_price,
            purchase_date=model.purchase_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
