from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum

from ticketing.logging_config import logger

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")

class DiscountType(str, Enum):
    """How a route discount changes a fare"""
    DECREASE = "decrease"
    INCREASE = "increase"
    AMOUNT = "amount"

@dataclass
class PriceAdjustment:
    """Currency-converted prices before and after the route discount"""
    base_price: Dict[str, Any] = field(default_factory=dict)
    updated_base_price: Dict[str, Any] = field(default_factory=dict)

def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a price column value, returning None for anything non-numeric"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number

def round_price(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

def apply_discount(price: Decimal, discount_type: str, discount_value: Decimal) -> Decimal:
    """Apply one discount rule to an already rounded price"""
    if discount_type == DiscountType.DECREASE.value:
        return price - price * discount_value / HUNDRED
    elif discount_type == DiscountType.INCREASE.value:
        return price + price * discount_value / HUNDRED
    elif discount_type == DiscountType.AMOUNT.value:
        return max(price + discount_value, Decimal("0"))

    logger.warning(f"Unknown discount type '{discount_type}', price left unchanged")
    return price

def adjust(
    prices: Dict[str, Any],
    exchange_rate: Decimal = Decimal("1"),
    discount: Optional[Any] = None
) -> PriceAdjustment:
    """
    Convert every numeric price column with the exchange rate, then apply the
    discount. Each step rounds half-up to two decimal places. Null and
    non-numeric columns are copied through untouched.

    ``discount`` is anything with ``discount_type`` and ``discount_value``
    attributes (normally a RouteDiscount row).
    """
    rate = to_decimal(exchange_rate) or Decimal("1")
    discount_value = to_decimal(discount.discount_value) if discount is not None else None

    adjustment = PriceAdjustment()
    for column, raw_value in prices.items():
        price = to_decimal(raw_value)
        if price is None:
            adjustment.base_price[column] = raw_value
            adjustment.updated_base_price[column] = raw_value
            continue

        try:
            converted = round_price(price * rate)
            updated = converted
            if discount_value is not None:
                updated = round_price(apply_discount(converted, discount.discount_type, discount_value))
        except InvalidOperation:
            logger.warning(f"Price column '{column}' value {raw_value!r} cannot be priced, passed through")
            adjustment.base_price[column] = raw_value
            adjustment.updated_base_price[column] = raw_value
            continue

        adjustment.base_price[column] = converted
        adjustment.updated_base_price[column] = updated

    return adjustment
