from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from app.domain.models import InvestmentData


Symbol = Annotated[
    str,
    StringConstraints(strip_whitespace=True, to_upper=True, min_length=1, max_length=10),
]
CompanyName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
]
Price = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]

# investments.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2_147_483_647


class InvestmentRequest(BaseModel):
    """Create / replace payload (accepts snake_case or camelCase keys)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symbol: Symbol
    company_name: CompanyName
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    purchase_price: Price
    current_price: Price
    purchase_date: date

    def to_domain(self) -> InvestmentData:
        return InvestmentData(
            symbol=self.symbol,
            company_name=self.company_name,
            quantity=self.quantity,
            purchase_price=self.purchase_price,
            current_price=self.current_price,
            purchase_date=self.purchase_date,
        )


class ValuationSchema(BaseModel):
    invested_value: float
    current_value: float
    gain_loss: float
    gain_loss_percent: float


class ValuationDisplaySchema(BaseModel):
    gain_loss: str
    gain_loss_percent: str


class InvestmentResponse(BaseModel):
    id: str
    symbol: str
    company_name: str
    quantity: int
    purchase_price: float
    current_price: float
    purchase_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    valuation: ValuationSchema
    display: ValuationDisplaySchema
