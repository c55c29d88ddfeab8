"""Generic two-token exchange pair and its MarketBackend adapter.

ConstantProductPair knows nothing about outcomes: it orders its tokens as
token0/token1 (by symbol), reports (reserve0, reserve1), and accepts deposits
at any ratio, minting shares for the smaller side (the excess stays in the
pool). PairMarketAdapter maps SI/NO onto that ordering so the router can
run against an external pool exactly as against OutcomePairMarket.
"""

import logging

from src.pm_amm.domain import curve
from src.pm_common.enums import Side
from src.pm_common.errors import InsufficientLiquidityMintedError, InsufficientLPError
from src.pm_common.fixed_point import validate_amount
from src.pm_common.savepoint import atomic, track_attr
from src.pm_token.domain.protocols import FungibleAsset
from src.pm_token.domain.token import FungibleToken

logger = logging.getLogger(__name__)


class ConstantProductPair:
    def __init__(
        self,
        account: str,
        token_a: FungibleAsset,
        token_b: FungibleAsset,
        lp_symbol: str = "PAIR-LP",
    ) -> None:
        self.account = account
        self.token0, self.token1 = sorted((token_a, token_b), key=lambda t: t.symbol)
        self.reserve0 = 0
        self.reserve1 = 0
        self.lp = FungibleToken(
            f"{self.token0.symbol}-{self.token1.symbol} pair share", lp_symbol, minter=account
        )

    def get_reserves(self) -> tuple[int, int]:
        return self.reserve0, self.reserve1

    def _update(self, reserve0: int, reserve1: int) -> None:
        track_attr(self, "reserve0")
        track_attr(self, "reserve1")
        self.reserve0 = reserve0
        self.reserve1 = reserve1

    @atomic
    def swap(self, caller: str, amount_in: int, token_in: FungibleAsset) -> int:
        validate_amount(amount_in, "amount_in")
        zero_for_one = token_in is self.token0
        r_in, r_out = (
            (self.reserve0, self.reserve1) if zero_for_one else (self.reserve1, self.reserve0)
        )
        amount_out = curve.require_output(curve.get_amount_out(amount_in, r_in, r_out))
        token_out = self.token1 if zero_for_one else self.token0
        token_in.transfer_from(self.account, caller, self.account, amount_in)
        token_out.transfer(self.account, caller, amount_out)
        if zero_for_one:
            self._update(self.reserve0 + amount_in, self.reserve1 - amount_out)
        else:
            self._update(self.reserve0 - amount_out, self.reserve1 + amount_in)
        return amount_out

    @atomic
    def mint(self, caller: str, amount0: int, amount1: int) -> int:
        validate_amount(amount0, "amount0")
        validate_amount(amount1, "amount1")
        supply = self.lp.total_supply
        if supply == 0:
            liquidity = curve.initial_liquidity(amount0, amount1)
            if liquidity <= curve.MINIMUM_LIQUIDITY:
                raise InsufficientLiquidityMintedError(liquidity)
            self.lp.mint(self.account, curve.LOCKED_ACCOUNT, curve.MINIMUM_LIQUIDITY)
            liquidity -= curve.MINIMUM_LIQUIDITY
        else:
            liquidity = curve.liquidity_for_deposit(
                amount0, amount1, self.reserve0, self.reserve1, supply
            )
            if liquidity == 0:
                raise InsufficientLiquidityMintedError(liquidity)
        self.token0.transfer_from(self.account, caller, self.account, amount0)
        self.token1.transfer_from(self.account, caller, self.account, amount1)
        self._update(self.reserve0 + amount0, self.reserve1 + amount1)
        self.lp.mint(self.account, caller, liquidity)
        return liquidity

    @atomic
    def burn(self, caller: str, lp_amount: int) -> tuple[int, int]:
        validate_amount(lp_amount, "lp_amount")
        held = self.lp.balance_of(caller)
        if held < lp_amount:
            raise InsufficientLPError(lp_amount, held)
        amount0, amount1 = curve.amounts_for_shares(
            lp_amount, self.reserve0, self.reserve1, self.lp.total_supply
        )
        self.lp.burn(self.account, caller, lp_amount)
        self._update(self.reserve0 - amount0, self.reserve1 - amount1)
        self.token0.transfer(self.account, caller, amount0)
        self.token1.transfer(self.account, caller, amount1)
        return amount0, amount1


class PairMarketAdapter:
    """MarketBackend view of a ConstantProductPair holding SI and NO."""

    def __init__(self, pair: ConstantProductPair, token_si: FungibleAsset, token_no: FungibleAsset) -> None:
        if {id(pair.token0), id(pair.token1)} != {id(token_si), id(token_no)}:
            raise ValueError("pair does not trade the given SI/NO tokens")
        self.pair = pair
        self.account = pair.account
        self.token_si = token_si
        self.token_no = token_no
        self._si_is_token0 = pair.token0 is token_si

    @property
    def lp_token(self) -> FungibleToken:
        return self.pair.lp

    def get_reserves(self) -> tuple[int, int]:
        r0, r1 = self.pair.get_reserves()
        return (r0, r1) if self._si_is_token0 else (r1, r0)

    def swap(self, caller: str, amount_in: int, side_in: Side) -> int:
        token_in = self.token_si if side_in is Side.SI else self.token_no
        return self.pair.swap(caller, amount_in, token_in)

    def add_liquidity(self, caller: str, amount_si: int, amount_no: int) -> int:
        if self._si_is_token0:
            return self.pair.mint(caller, amount_si, amount_no)
        return self.pair.mint(caller, amount_no, amount_si)

    def remove_liquidity(self, caller: str, lp_amount: int) -> tuple[int, int]:
        amount0, amount1 = self.pair.burn(caller, lp_amount)
        return (amount0, amount1) if self._si_is_token0 else (amount1, amount0)
