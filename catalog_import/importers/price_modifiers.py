# catalog_import/importers/price_modifiers.py

"""
Price modifiers of variety and builder options.

A modifier is the option row's absolute price minus the group's base price,
rounded to whole cents (half-up). Prices are handled as ``Decimal`` so that
10.005 against 10.00 becomes 0.01 rather than a float artefact.
"""

import logging
import math
from decimal import Decimal, DecimalException, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def as_finite_decimal(value: Any) -> Optional[Decimal]:
    """``value`` as a finite Decimal, or None for missing / NaN / infinite input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = str(value)
    try:
        number = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    return number if number.is_finite() else None


def round_price(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def price_modifier(row_price: Any, base_price: Any) -> Decimal:
    """
    Cents-rounded ``row_price - base_price``.

    Returns 0 when either price is not a finite number or the difference
    cannot be expressed in cents.
    """
    row = as_finite_decimal(row_price)
    base = as_finite_decimal(base_price)
    if row is None or base is None:
        return ZERO
    try:
        return round_price(row - base)
    except DecimalException:
        # Difference too large to hold in cents
        logger.warning(f"⚠️ Price difference {row} - {base} out of range, modifier set to 0")
        return ZERO
