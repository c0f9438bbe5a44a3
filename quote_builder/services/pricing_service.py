"""
Pricing engine for service lines.

Turns a line's raw pricing inputs into its derived unit price and amount,
and coerces loosely typed form input into numbers.
"""

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from quote_builder.models.quote import DiscountType, ServiceLine
from quote_builder.utils.logging import ServiceLogger


# Fields whose change requires the derived prices to be recomputed
PRICE_FIELDS = frozenset({"quantity", "original_price", "discount_type", "discount_value"})
TEXT_FIELDS = frozenset({"name", "description", "unit", "discount_reason"})
DERIVED_FIELDS = frozenset({"unit_price", "amount"})

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class LinePrice:
    """Derived pricing for a single service line."""
    unit_price: int
    amount: int


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def coerce_int(value: Any) -> int:
    """
    Leniently parse an integer from form input.

    Strings yield their leading integer, floats are truncated, anything
    unparseable becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def coerce_float(value: Any) -> float:
    """Leniently parse a number from form input; unparseable input becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_FLOAT.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    return number if math.isfinite(number) else 0.0


def calculate_line_price(
    original_price: float,
    quantity: int,
    discount_type: DiscountType | str,
    discount_value: float = 0,
) -> LinePrice:
    """
    Compute unit price and amount for a service line.

    Percent discounts are not clamped here; callers keep ``discount_value``
    within 0-100. Amount discounts never push the unit price below zero.
    """
    kind = DiscountType.parse(discount_type)

    if kind is DiscountType.AMOUNT:
        unit_price = max(0, original_price - discount_value)
    elif kind is DiscountType.PERCENT:
        unit_price = original_price * (1 - discount_value / 100)
    elif kind is DiscountType.FREE:
        unit_price = 0
    else:
        unit_price = original_price

    rounded_unit = round_half_away_from_zero(unit_price)
    return LinePrice(
        unit_price=rounded_unit,
        amount=round_half_away_from_zero(rounded_unit * quantity),
    )


class PricingEngine:
    """
    Stateless service applying line edits and repricing.

    Every method returns a new ServiceLine; inputs are never mutated.
    """

    def __init__(self):
        self.logger = ServiceLogger("pricing")

    def price_line(self, line: ServiceLine) -> ServiceLine:
        """Return a copy of ``line`` with its derived fields recomputed."""
        price = calculate_line_price(
            line.original_price,
            line.quantity,
            line.discount_type,
            line.discount_value,
        )
        return line.model_copy(update={"unit_price": price.unit_price, "amount": price.amount})

    def apply_edit(self, line: ServiceLine, field: str, value: Any) -> ServiceLine:
        """
        Apply a single field edit to a line.

        Pricing inputs are coerced and trigger repricing; text fields pass
        through unchanged otherwise.

        Raises:
            ValueError: If ``field`` is derived or not a line field
        """
        if field in DERIVED_FIELDS:
            raise ValueError(f"Derived field cannot be edited directly: {field}")

        if field in TEXT_FIELDS:
            return line.model_copy(update={field: "" if value is None else str(value)})

        if field not in PRICE_FIELDS:
            raise ValueError(f"Unknown service line field: {field}")

        if field in ("quantity", "original_price"):
            coerced: Any = coerce_int(value)
        elif field == "discount_type":
            coerced = DiscountType.parse(value)
        else:
            coerced = coerce_float(value)

        repriced = self.price_line(line.model_copy(update={field: coerced}))
        self.logger.log_debug(
            "line_repriced",
            line_id=line.id,
            field=field,
            unit_price=repriced.unit_price,
            amount=repriced.amount,
        )
        return repriced
