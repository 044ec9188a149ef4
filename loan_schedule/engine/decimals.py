"""Fixed-point helpers shared by every schedule calculation.

All money and rate values are ``Decimal``. Each step is rounded with
ROUND_HALF_UP to ``decimal_digit`` places before it feeds the next one.
"""

from contextlib import contextmanager
from decimal import Context, Decimal, ROUND_HALF_UP, localcontext
from typing import Iterator

from loan_schedule.config import settings

ZERO = Decimal("0")
INFINITY = Decimal("Infinity")


def to_decimal(value) -> Decimal:
    """Coerce int/str/float/Decimal into Decimal (floats go through str)."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_fixed(value, decimal_digit: int) -> Decimal:
    """Round to ``decimal_digit`` places, half away from zero."""
    return to_decimal(value).quantize(Decimal(1).scaleb(-decimal_digit), ROUND_HALF_UP)


@contextmanager
def calculation_context() -> Iterator[Context]:
    """Thread-local decimal context used for all schedule arithmetic."""
    with localcontext() as ctx:
        ctx.prec = settings.calculation_precision
        ctx.rounding = ROUND_HALF_UP
        yield ctx
