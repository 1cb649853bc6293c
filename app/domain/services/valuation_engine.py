"""
VALUATION ENGINE
Holdings → invested cost, market value, gain/loss (single source of truth)

RESPONSIBILITIES:
- Value one holding
- Aggregate a collection of holdings into portfolio stats
- Reject out-of-domain input (negative, non-finite, missing)

RULES:
❌ No rounding (presentation layer rounds)
❌ No caching, no state
❌ No averaging of per-holding percentages
✅ Decimal arithmetic for money
✅ Percentage is 0 when nothing was invested
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from app.domain.models import HoldingValuation, PortfolioStats


ZERO = Decimal("0")
HUNDRED = Decimal("100")


class InvalidInputError(ValueError):
    """Holding fields outside the valuation domain"""


class ValuationEngine:
    """
    Valuation Engine
    Pure projection over holdings, re-run on every read
    """

    def value_of(self, holding: Any) -> HoldingValuation:
        """
        Value a single holding

        Args:
            holding: Any object exposing quantity, purchase_price, current_price

        Returns:
            HoldingValuation with unrounded figures
        """
        quantity, purchase_price, current_price = self._read_fields(holding)

        invested_value = quantity * purchase_price
        current_value = quantity * current_price
        gain_loss = current_value - invested_value

        return HoldingValuation(
            invested_value=invested_value,
            current_value=current_value,
            gain_loss=gain_loss,
            gain_loss_percent=self._percent(gain_loss, invested_value),
        )

    def aggregate(self, holdings: Iterable[Any]) -> PortfolioStats:
        """
        Aggregate holdings into portfolio stats

        Percentage is computed over summed invested value, so large
        stakes weigh more than small ones.

        Args:
            holdings: Collection of holdings (order irrelevant, not deduplicated)

        Returns:
            PortfolioStats (all zero for an empty collection)
        """
        total_invested = ZERO
        total_value = ZERO
        count = 0

        for holding in holdings:
            valuation = self.value_of(holding)
            total_invested += valuation.invested_value
            total_value += valuation.current_value
            count += 1

        total_gain_loss = total_value - total_invested

        return PortfolioStats(
            total_invested=total_invested,
            total_value=total_value,
            total_gain_loss=total_gain_loss,
            gain_loss_percent=self._percent(total_gain_loss, total_invested),
            total_holdings=count,
        )

    @staticmethod
    def _percent(gain_loss: Decimal, invested: Decimal) -> Decimal:
        # Strict > 0: invested can never be negative
        if invested > ZERO:
            return gain_loss / invested * HUNDRED
        return ZERO

    def _read_fields(self, holding: Any) -> tuple[int, Decimal, Decimal]:
        try:
            quantity = holding.quantity
            purchase_price = holding.purchase_price
            current_price = holding.current_price
        except AttributeError as exc:
            raise InvalidInputError(f"Holding is missing a field: {exc}") from exc

        return (
            self._check_quantity(quantity),
            self._check_price("purchase_price", purchase_price),
            self._check_price("current_price", current_price),
        )

    @staticmethod
    def _check_quantity(quantity: Any) -> int:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidInputError(f"quantity must be an integer, got {quantity!r}")
        if quantity < 0:
            raise InvalidInputError(f"quantity cannot be negative, got {quantity}")
        return quantity

    @staticmethod
    def _check_price(name: str, value: Any) -> Decimal:
        if value is None or isinstance(value, bool):
            raise InvalidInputError(f"{name} must be a number, got {value!r}")

        if isinstance(value, Decimal):
            price = value
        elif isinstance(value, (int, float, str)):
            try:
                price = Decimal(str(value))
            except InvalidOperation as exc:
                raise InvalidInputError(f"{name} is not a number: {value!r}") from exc
        else:
            raise InvalidInputError(f"{name} must be a number, got {type(value).__name__}")

        if not price.is_finite():
            raise InvalidInputError(f"{name} must be finite, got {value!r}")
        if price < ZERO:
            raise InvalidInputError(f"{name} cannot be negative, got {value!r}")
        return price
