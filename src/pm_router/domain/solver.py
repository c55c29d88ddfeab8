"""Closed-form swap sizing for the router (fee-free constant product).

sell: holding T of side A, swap x of it into B so that the A left over
equals the B received:

    T - x = r_b * x / (r_a + x)
    x^2 + (r_a + r_b - T) x - T r_a = 0
    x = (sqrt(B^2 + 4 T r_a) - B) / 2,   B = r_a + r_b - T

zap: holding c SI + c NO against reserves (r_long, r_short), r_long >= r_short,
swap short-side tokens in until holdings match the post-swap reserve ratio.
With R the post-swap short reserve and k = r_long * r_short:

    (c + r_long) R = (c + r_short) k / R
    R = sqrt(k (c + r_short) (c + r_long)) / (c + r_long)
    x = R - r_short

Both roots are floored, which keeps the trader on the safe side of the
curve: the sell leaves at least as much A as B received, and the zap never
overshoots the ratio. The sell root is then stepped up to the largest x
that still satisfies that bound, so the A left unmatched is less than the
output of one more unit of x.
"""

from src.pm_amm.domain import curve
from src.pm_common.enums import Side
from src.pm_common.errors import InsufficientOutputError
from src.pm_common.fixed_point import isqrt, mul_div_down


def solve_sell_swap(amount: int, reserve_same: int, reserve_other: int) -> int:
    """Amount of the held side to swap so both legs come out equal."""
    if reserve_same == 0 or reserve_other == 0:
        raise InsufficientOutputError("pool has no reserves to sell into")
    b = reserve_same + reserve_other - amount
    root = isqrt(b * b + 4 * amount * reserve_same)
    x = (root - b) // 2
    # two floors can leave x a unit short of the largest balanced amount
    while x + 1 < amount and (
        curve.get_amount_out(x + 1, reserve_same, reserve_other) <= amount - x - 1
    ):
        x += 1
    if x <= 0 or x >= amount:
        raise InsufficientOutputError(f"cannot balance a sale of {amount}")
    return x


def solve_zap_swap(collateral: int, reserve_si: int, reserve_no: int) -> tuple[Side, int]:
    """(side to swap in, amount) aligning a fresh c/c pair with the reserves."""
    if reserve_si >= reserve_no:
        side_in, r_long, r_short = Side.NO, reserve_si, reserve_no
    else:
        side_in, r_long, r_short = Side.SI, reserve_no, reserve_si
    if r_long == r_short:
        return side_in, 0
    k = r_long * r_short
    r_short_after = isqrt(k * (collateral + r_short) * (collateral + r_long)) // (
        collateral + r_long
    )
    return side_in, max(r_short_after - r_short, 0)


def balanced_deposit(
    amount_si: int, amount_no: int, reserve_si: int, reserve_no: int
) -> tuple[int, int]:
    """Largest pair within the holdings that matches the reserve ratio."""
    no_optimal = curve.quote(amount_si, reserve_si, reserve_no)
    if no_optimal <= amount_no:
        return amount_si, no_optimal
    return mul_div_down(amount_no, reserve_si, reserve_no), amount_no


def risk_skew(collateral: int, risk_percent: int) -> int:
    """SI withheld from the seed deposit: floor(c * risk / 100). Zero at 0 %."""
    return collateral * risk_percent // 100
