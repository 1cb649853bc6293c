"""
Portfolio API Routes
Aggregate gain/loss for the current user's holdings
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.api.dependencies import get_current_user
from app.config import settings
from app.domain.models import PortfolioStats, User
from app.domain.schemas.portfolio import PortfolioDisplaySchema, PortfolioStatsSchema
from app.domain.services.valuation_engine import ValuationEngine
from app.infrastructure.db.database import get_db
from app.infrastructure.db.repositories.investment_repository import InvestmentRepository
from app.utils.formatting import (
    format_currency,
    format_gain_loss,
    format_percent,
    round_money,
    round_percent,
)

logger = logging.getLogger(__name__)
router = APIRouter()

valuation_engine = ValuationEngine()


def _to_schema(stats: PortfolioStats) -> PortfolioStatsSchema:
    symbol = settings.CURRENCY_SYMBOL
    return PortfolioStatsSchema(
        total_invested=float(round_money(stats.total_invested)),
        total_value=float(round_money(stats.total_value)),
        total_gain_loss=float(round_money(stats.total_gain_loss)),
        gain_loss_percent=float(round_percent(stats.gain_loss_percent)),
        total_holdings=stats.total_holdings,
        display=PortfolioDisplaySchema(
            total_invested=format_currency(stats.total_invested, symbol),
            total_value=format_currency(stats.total_value, symbol),
            total_gain_loss=format_gain_loss(stats.total_gain_loss, symbol),
            gain_loss_percent=format_percent(stats.gain_loss_percent),
        ),
    )


@router.get("/summary", response_model=PortfolioStatsSchema)
async def get_portfolio_summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get portfolio totals for the dashboard

    Recomputed from the stored holdings on every call.
    """
    try:
        repo = InvestmentRepository(db)
        investments = await repo.list_for_user(user.id)
        stats = valuation_engine.aggregate(inv.as_holding() for inv in investments)

        logger.info(
            "Portfolio summary ready | user=%s holdings=%d invested=%.2f value=%.2f",
            user.id,
            stats.total_holdings,
            stats.total_invested,
            stats.total_value,
        )
        return _to_schema(stats)

    except Exception as e:
        logger.error(f"Error building portfolio summary: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch portfolio summary"
        )
