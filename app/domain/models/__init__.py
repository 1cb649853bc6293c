"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    Holding,
    Investment,
    InvestmentData,
    User,
)
from .portfolio import (
    HoldingValuation,
    PortfolioStats,
)

__all__ = [
    # Entities
    "Holding",
    "Investment",
    "InvestmentData",
    "User",

    # Valuation results
    "HoldingValuation",
    "PortfolioStats",
]
