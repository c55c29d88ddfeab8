"""Domain models for pm_router — pure dataclasses describing call outcomes."""

from dataclasses import dataclass

from src.pm_common.enums import Side


@dataclass
class InitializeResult:
    collateral_in: int
    risk_percent: int
    skew_si: int            # SI withheld from the seed deposit, paid to caller
    shares_out: int
    reserve_si: int
    reserve_no: int


@dataclass
class BuyResult:
    side: Side
    collateral_in: int
    swap_out: int
    amount_out: int         # collateral_in + swap_out


@dataclass
class SellResult:
    side: Side
    amount_in: int
    swapped_in: int         # part of amount_in sold into the opposite side
    collateral_out: int
    dust_returned: int      # unmatched tokens handed back


@dataclass
class LiquidityResult:
    collateral_in: int
    shares_out: int
    deposited_si: int
    deposited_no: int
    refund_si: int
    refund_no: int


@dataclass
class RemoveLiquidityResult:
    shares_in: int
    amount_si: int
    amount_no: int
