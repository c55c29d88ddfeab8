"""Constant-product curve math (fee-free), shared by every market backend.

All functions are pure integer arithmetic. Rounding always favors the pool:
outputs and minted shares are floored, so ``reserve_in * reserve_out`` never
decreases across a swap.
"""

from src.pm_common.errors import (
    InsufficientOutputError,
    InsufficientReserveError,
    ZeroInputError,
)
from src.pm_common.fixed_point import WAD, checked, isqrt, mul_div_down, mul_div_up

MINIMUM_LIQUIDITY = 1000
LOCKED_ACCOUNT = "0x000000000000000000000000000000000000dEaD"


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """floor(reserve_out * amount_in / (reserve_in + amount_in)).

    Equals reserve_out - reserve_in * reserve_out / (reserve_in + amount_in)
    before rounding.
    """
    if amount_in == 0:
        raise ZeroInputError("amount_in")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientReserveError()
    return mul_div_down(reserve_out, amount_in, reserve_in + amount_in)


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B matching ``amount_a`` at the current reserve ratio (floored)."""
    if reserve_a == 0 or reserve_b == 0:
        raise InsufficientReserveError()
    return mul_div_down(amount_a, reserve_b, reserve_a)


def is_ratio_match(amount_a: int, amount_b: int, reserve_a: int, reserve_b: int) -> bool:
    """True when the pair equals the reserve ratio up to integer quotation.

    Either leg may be the one that was quoted from the other, so both
    directions are accepted with floor or ceiling rounding.
    """
    for x, y, rx, ry in ((amount_a, amount_b, reserve_a, reserve_b),
                         (amount_b, amount_a, reserve_b, reserve_a)):
        if mul_div_down(x, ry, rx) <= y <= mul_div_up(x, ry, rx):
            return True
    return False


def initial_liquidity(amount_a: int, amount_b: int) -> int:
    """Shares minted by the first deposit, before the locked minimum is removed."""
    return isqrt(checked(amount_a * amount_b))


def liquidity_for_deposit(
    amount_a: int, amount_b: int, reserve_a: int, reserve_b: int, lp_supply: int
) -> int:
    return min(
        mul_div_down(amount_a, lp_supply, reserve_a),
        mul_div_down(amount_b, lp_supply, reserve_b),
    )


def amounts_for_shares(
    lp_amount: int, reserve_a: int, reserve_b: int, lp_supply: int
) -> tuple[int, int]:
    return (
        mul_div_down(reserve_a, lp_amount, lp_supply),
        mul_div_down(reserve_b, lp_amount, lp_supply),
    )


def require_output(amount_out: int) -> int:
    if amount_out == 0:
        raise InsufficientOutputError("swap output rounds to zero")
    return amount_out


def implied_probability(reserve_si: int, reserve_no: int) -> int:
    """Implied SI probability (1e18 scale): reserve_no / (reserve_si + reserve_no).

    An empty pool reports 0.5.
    """
    total = reserve_si + reserve_no
    if total == 0:
        return WAD // 2
    return mul_div_down(reserve_no, WAD, total)
