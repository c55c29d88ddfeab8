"""OutcomePairMarket — fee-free constant-product market over SI/NO.

Holds reserve_si / reserve_no and issues liquidity shares (its own
FungibleToken, minted and burned only by the market account).

- add_liquidity on an empty pool: reserves set directly, sqrt(a*b) shares,
  MINIMUM_LIQUIDITY of them locked forever at LOCKED_ACCOUNT.
- add_liquidity on a live pool: pair must match the reserve ratio; the
  caller (router) is responsible for balancing it first.
- swap: amount_out = floor(r_out * a / (r_in + a)).
- remove_liquidity: pro-rata share of both reserves.
"""

import logging

from src.pm_amm.domain import curve
from src.pm_common.enums import Side
from src.pm_common.errors import (
    InsufficientLiquidityMintedError,
    InsufficientLPError,
    InvalidRatioError,
)
from src.pm_common.fixed_point import validate_amount
from src.pm_common.savepoint import atomic, track_attr
from src.pm_token.domain.protocols import FungibleAsset
from src.pm_token.domain.token import FungibleToken

logger = logging.getLogger(__name__)


class OutcomePairMarket:
    def __init__(
        self,
        account: str,
        token_si: FungibleAsset,
        token_no: FungibleAsset,
        lp_symbol: str = "MLP",
    ) -> None:
        self.account = account
        self.token_si = token_si
        self.token_no = token_no
        self.reserve_si = 0
        self.reserve_no = 0
        self._lp = FungibleToken(f"{lp_symbol} liquidity share", lp_symbol, minter=account)

    @property
    def lp_token(self) -> FungibleToken:
        return self._lp

    @property
    def lp_supply(self) -> int:
        return self._lp.total_supply

    def get_reserves(self) -> tuple[int, int]:
        return self.reserve_si, self.reserve_no

    def _token(self, side: Side) -> FungibleAsset:
        return self.token_si if side is Side.SI else self.token_no

    def _set_reserves(self, reserve_si: int, reserve_no: int) -> None:
        track_attr(self, "reserve_si")
        track_attr(self, "reserve_no")
        self.reserve_si = reserve_si
        self.reserve_no = reserve_no

    # ------------------------------------------------------------------

    def get_amount_out(self, amount_in: int, side_in: Side) -> int:
        if side_in is Side.SI:
            return curve.get_amount_out(amount_in, self.reserve_si, self.reserve_no)
        return curve.get_amount_out(amount_in, self.reserve_no, self.reserve_si)

    @atomic
    def swap(self, caller: str, amount_in: int, side_in: Side) -> int:
        validate_amount(amount_in, "amount_in")
        amount_out = curve.require_output(self.get_amount_out(amount_in, side_in))
        self._token(side_in).transfer_from(self.account, caller, self.account, amount_in)
        self._token(side_in.opposite).transfer(self.account, caller, amount_out)
        if side_in is Side.SI:
            self._set_reserves(self.reserve_si + amount_in, self.reserve_no - amount_out)
        else:
            self._set_reserves(self.reserve_si - amount_out, self.reserve_no + amount_in)
        logger.debug(
            "Swap: market=%s in=%d %s out=%d reserves=(%d, %d)",
            self.account,
            amount_in,
            side_in.value,
            amount_out,
            self.reserve_si,
            self.reserve_no,
        )
        return amount_out

    @atomic
    def add_liquidity(self, caller: str, amount_si: int, amount_no: int) -> int:
        validate_amount(amount_si, "amount_si")
        validate_amount(amount_no, "amount_no")
        supply = self.lp_supply
        if supply == 0:
            liquidity = curve.initial_liquidity(amount_si, amount_no)
            if liquidity <= curve.MINIMUM_LIQUIDITY:
                raise InsufficientLiquidityMintedError(liquidity)
            self._lp.mint(self.account, curve.LOCKED_ACCOUNT, curve.MINIMUM_LIQUIDITY)
            minted = liquidity - curve.MINIMUM_LIQUIDITY
        else:
            if not curve.is_ratio_match(amount_si, amount_no, self.reserve_si, self.reserve_no):
                raise InvalidRatioError(amount_si, amount_no)
            minted = curve.liquidity_for_deposit(
                amount_si, amount_no, self.reserve_si, self.reserve_no, supply
            )
            if minted == 0:
                raise InsufficientLiquidityMintedError(minted)

        self.token_si.transfer_from(self.account, caller, self.account, amount_si)
        self.token_no.transfer_from(self.account, caller, self.account, amount_no)
        self._set_reserves(self.reserve_si + amount_si, self.reserve_no + amount_no)
        self._lp.mint(self.account, caller, minted)
        logger.debug(
            "Add liquidity: market=%s si=%d no=%d shares=%d", self.account, amount_si, amount_no, minted
        )
        return minted

    @atomic
    def remove_liquidity(self, caller: str, lp_amount: int) -> tuple[int, int]:
        validate_amount(lp_amount, "lp_amount")
        held = self._lp.balance_of(caller)
        if held < lp_amount:
            raise InsufficientLPError(lp_amount, held)
        out_si, out_no = curve.amounts_for_shares(
            lp_amount, self.reserve_si, self.reserve_no, self.lp_supply
        )
        self._lp.burn(self.account, caller, lp_amount)
        self._set_reserves(self.reserve_si - out_si, self.reserve_no - out_no)
        self.token_si.transfer(self.account, caller, out_si)
        self.token_no.transfer(self.account, caller, out_no)
        logger.debug(
            "Remove liquidity: market=%s shares=%d si=%d no=%d", self.account, lp_amount, out_si, out_no
        )
        return out_si, out_no
