"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Holding:
    """
    Valuation input - Immutable

    Only the three numeric fields take part in valuation arithmetic.
    """
    quantity: int
    purchase_price: Decimal
    current_price: Decimal


@dataclass(frozen=True)
class User:
    """Authenticated user as supplied by the identity provider"""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("User id cannot be empty")


@dataclass(frozen=True)
class InvestmentData:
    """Editable fields of an investment, as submitted by the user"""
    symbol: str
    company_name: str
    quantity: int
    purchase_price: Decimal
    current_price: Decimal
    purchase_date: date


@dataclass(frozen=True)
class Investment:
    """Persisted holding record owned by a user"""
    id: str
    user_id: str
    symbol: str
    company_name: str
    quantity: int
    purchase_price: Decimal
    current_price: Decimal
    purchase_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def as_holding(self) -> Holding:
        """Build a fresh valuation input from this record"""
        return Holding(
            quantity=self.quantity,
            purchase_price=self.purchase_price,
            current_price=self.current_price,
        )
