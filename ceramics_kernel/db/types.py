"""
Module: ceramics_kernel.db.types
Responsibility: Precision constants and the single rounding helper for
    monetary and percentage values.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    selectors/ and the engines.  MUST NOT import from any of those layers.

Invariants enforced:
    - round_money() is the ONLY sanctioned rounding function.  Every
      displayed currency amount and percentage is rounded to two places
      with ROUND_HALF_UP (half away from zero for Decimal).
    - No floats anywhere: all amounts use Decimal.
"""

from decimal import ROUND_HALF_UP, Decimal

MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP
ZERO = Decimal("0")


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary or percentage value to specified decimal places.

    Args:
        value: The Decimal value to round.
        decimal_places: Number of decimal places to round to.
        rounding: Rounding mode (default: ROUND_HALF_UP).

    Returns:
        Rounded Decimal value.
    """
    quantize_str = "0." + "0" * decimal_places if decimal_places else "1"
    return value.quantize(Decimal(quantize_str), rounding=rounding)
