"""18-decimal fixed-point arithmetic for collateral, claims and shares.

All amounts are int scaled by WAD (1e18 == 1.0). No float.
Every product is bounded by MAX_UINT256 so results stay representable
by the token ledgers the engine is modelled on.
"""

import math
from decimal import Decimal, InvalidOperation

from src.pm_common.errors import (
    DivisionByZeroError,
    InvalidAmountError,
    InvalidRiskError,
    InvalidScaleError,
    MathOverflowError,
    ZeroInputError,
)

WAD = 10**18
MAX_UINT256 = 2**256 - 1


def checked(value: int) -> int:
    """Return value if it fits in uint256, else raise MathOverflowError."""
    if value < 0:
        raise InvalidAmountError(value)
    if value > MAX_UINT256:
        raise MathOverflowError()
    return value


def mul_div_down(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator)."""
    if denominator == 0:
        raise DivisionByZeroError()
    return checked(a * b) // denominator


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator)."""
    if denominator == 0:
        raise DivisionByZeroError()
    product = checked(a * b)
    return (product + denominator - 1) // denominator


def isqrt(value: int) -> int:
    """Floor integer square root. Exact on arbitrary-size ints, so callers
    may take roots of intermediate products wider than uint256."""
    if value < 0:
        raise InvalidAmountError(value)
    return math.isqrt(value)


def validate_amount(amount: int, field: str = "amount") -> None:
    """Amounts must be strictly positive and fit in uint256."""
    if amount == 0:
        raise ZeroInputError(field)
    checked(amount)


def validate_scale(scale: int) -> None:
    if not (0 <= scale <= WAD):
        raise InvalidScaleError(scale)


def validate_risk_percent(risk_percent: int) -> None:
    if not (0 <= risk_percent < 100):
        raise InvalidRiskError(risk_percent)


def to_wad(value: str | int) -> int:
    """Convert a human decimal ("12.5") into base units: '12.5' -> 12500000000000000000."""
    try:
        scaled = Decimal(value) * WAD
    except InvalidOperation as e:
        raise ValueError(f"Not a decimal amount: {value!r}") from e
    if scaled != scaled.to_integral_value():
        raise ValueError(f"More than 18 decimals: {value!r}")
    return checked(int(scaled))


def wad_to_display(amount: int, places: int = 4) -> str:
    """Base units to display string: 1234500000000000000000 -> '1,234.5000'."""
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), WAD)
    frac_digits = f"{frac:018d}"[:places]
    if places == 0:
        return f"{sign}{whole:,}"
    return f"{sign}{whole:,}.{frac_digits}"
