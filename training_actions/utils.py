from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal("0.01")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def round_money(value: float) -> float:
    """Round half away from zero to two decimals.

    Goes through ``repr`` so that 0.125 rounds to 0.13 rather than to the
    binary neighbour Python's ``round`` would pick.
    """
    quantized = Decimal(repr(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    return float(quantized)
