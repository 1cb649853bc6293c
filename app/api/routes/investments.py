"""
Investment API Routes
CRUD over the current user's holdings, each returned with its valuation
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from app.api.dependencies import get_current_user
from app.domain.models import Investment, User
from app.config import settings
from app.domain.schemas.investment import (
    InvestmentRequest,
    InvestmentResponse,
    ValuationDisplaySchema,
    ValuationSchema,
)
from app.domain.services.valuation_engine import ValuationEngine
from app.infrastructure.db.database import get_db
from app.infrastructure.db.repositories.investment_repository import (
    InvestmentNotFoundError,
    InvestmentRepository,
)
from app.utils.formatting import format_gain_loss, format_percent, round_money, round_percent

logger = logging.getLogger(__name__)
router = APIRouter()

valuation_engine = ValuationEngine()


def _to_response(investment: Investment) -> InvestmentResponse:
    valuation = valuation_engine.value_of(investment.as_holding())
    return InvestmentResponse(
        id=investment.id,
        symbol=investment.symbol,
        company_name=investment.company_name,
        quantity=investment.quantity,
        purchase_price=float(round_money(investment.purchase_price)),
        current_price=float(round_money(investment.current_price)),
        purchase_date=investment.purchase_date,
        created_at=investment.created_at,
        updated_at=investment.updated_at,
        valuation=ValuationSchema(
            invested_value=float(round_money(valuation.invested_value)),
            current_value=float(round_money(valuation.current_value)),
            gain_loss=float(round_money(valuation.gain_loss)),
            gain_loss_percent=float(round_percent(valuation.gain_loss_percent)),
        ),
        display=ValuationDisplaySchema(
            gain_loss=format_gain_loss(valuation.gain_loss, settings.CURRENCY_SYMBOL),
            gain_loss_percent=format_percent(valuation.gain_loss_percent),
        ),
    )


@router.get("", response_model=List[InvestmentResponse])
async def list_investments(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the user's holdings in creation order
    """
    try:
        repo = InvestmentRepository(db)
        investments = await repo.list_for_user(user.id)
        return [_to_response(inv) for inv in investments]

    except Exception as e:
        logger.error(f"Error fetching investments: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch investments"
        )


@router.get("/{investment_id}", response_model=InvestmentResponse)
async def get_investment(
    investment_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get one holding owned by the user"""
    try:
        repo = InvestmentRepository(db)
        investment = await repo.get(investment_id, user.id)
        if investment is None:
            raise InvestmentNotFoundError(investment_id)
        return _to_response(investment)

    except InvestmentNotFoundError:
        raise HTTPException(status_code=404, detail="Investment not found")
    except Exception as e:
        logger.error(f"Error fetching investment {investment_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch investment"
        )


@router.post("", response_model=InvestmentResponse, status_code=status.HTTP_201_CREATED)
async def create_investment(
    payload: InvestmentRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Record a new holding

    Fields are persisted verbatim; nothing is derived server-side.
    """
    try:
        repo = InvestmentRepository(db)
        investment = await repo.create(user.id, payload.to_domain())
        logger.info("Investment %s created for %s (%s)", investment.id, user.id, investment.symbol)
        return _to_response(investment)

    except Exception as e:
        logger.error(f"Error creating investment: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to create investment"
        )


@router.put("/{investment_id}", response_model=InvestmentResponse)
async def update_investment(
    investment_id: str,
    payload: InvestmentRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Replace every editable field of an owned holding"""
    try:
        repo = InvestmentRepository(db)
        investment = await repo.update(investment_id, user.id, payload.to_domain())
        return _to_response(investment)

    except InvestmentNotFoundError:
        raise HTTPException(status_code=404, detail="Investment not found")
    except Exception as e:
        logger.error(f"Error updating investment {investment_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to update investment"
        )


@router.delete("/{investment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_investment(
    investment_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete an owned holding (no-op if it does not exist)"""
    try:
        repo = InvestmentRepository(db)
        removed = await repo.delete(investment_id, user.id)
    except Exception as e:
        logger.error(f"Error deleting investment {investment_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to delete investment"
        )

    if removed:
        logger.info("Investment %s deleted for %s", investment_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
