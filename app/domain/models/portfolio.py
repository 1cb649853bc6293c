"""
DOMAIN MODELS - VALUATION RESULTS

Immutable structures produced by the valuation engine.
No database access. No rounding.
"""

from dataclasses import dataclass
from decimal import Decimal


ZERO = Decimal("0")


@dataclass(frozen=True)
class HoldingValuation:
    """
    Derived figures for a single holding.
    """
    invested_value: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal


@dataclass(frozen=True)
class PortfolioStats:
    """
    Aggregate figures for a collection of holdings.
    """
    total_invested: Decimal = ZERO
    total_value: Decimal = ZERO
    total_gain_loss: Decimal = ZERO
    gain_loss_percent: Decimal = ZERO
    total_holdings: int = 0
