"""
Amount conversion between major units (dollars) and minor units (cents).

The payment processor only accepts integer minor units, while the ledger
and application records hold Decimal major units. All arithmetic goes
through Decimal so that values with up to two decimal places survive
the round trip exactly; finer amounts are rounded half-up to the
nearest minor unit.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .settings import SettlementSettings, settlement_settings

Number = Union[Decimal, int, float, str]


def parse_amount(amount: Number) -> Decimal:
    """
    Parse and validate a major-unit amount.

    Args:
        amount: Amount in major units (e.g. 50, "50.00", 49.99)

    Returns:
        The amount as a Decimal

    Raises:
        ValueError: If the amount is not a finite positive number
    """
    if isinstance(amount, bool) or amount is None:
        raise ValueError("amount must be a number")

    try:
        # str() keeps floats like 0.1 from dragging in binary noise
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValueError("amount must be a number")

    if not value.is_finite():
        raise ValueError("amount must be a finite number")

    if value <= 0:
        raise ValueError("amount must be positive")

    return value


def to_minor_units(
    amount: Number,
    settings: SettlementSettings = settlement_settings,
) -> int:
    """
    Convert a major-unit amount to integer minor units.

    Example:
        >>> to_minor_units("50.00")
        5000
        >>> to_minor_units("10.005")
        1001

    Raises:
        ValueError: If the amount is invalid or rounds to zero minor units
    """
    value = parse_amount(amount)
    minor = (value * settings.minor_units_per_major).quantize(
        Decimal("1"),
        rounding=ROUND_HALF_UP,
    )

    if minor <= 0:
        raise ValueError("amount must be at least one minor unit")

    return int(minor)


def from_minor_units(
    minor_units: int,
    settings: SettlementSettings = settlement_settings,
) -> Decimal:
    """
    Convert integer minor units back to a major-unit Decimal.

    Example:
        >>> from_minor_units(5000)
        Decimal('50.00')
    """
    places = Decimal(1).scaleb(-settings.decimal_places)
    return (Decimal(int(minor_units)) / settings.minor_units_per_major).quantize(places)
