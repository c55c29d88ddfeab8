"""MarketRouter — stateless composition of vault and market operations.

The router holds no state between calls. Each operation:
1. pulls the caller's input (collateral, claim tokens or shares) into the
   router account (caller must have approved the router),
2. drives CollateralVault and the MarketBackend,
3. sweeps every resulting balance back to the caller.
All three steps share one RouterScope, so the call is all-or-nothing.
"""

import logging
from contextlib import AbstractContextManager

from src.pm_amm.domain import curve
from src.pm_amm.domain.protocols import MarketBackend
from src.pm_common.enums import Side
from src.pm_common.errors import AlreadyInitializedError, InsufficientOutputError
from src.pm_common.fixed_point import validate_amount, validate_risk_percent
from src.pm_router.domain import solver
from src.pm_router.domain.models import (
    BuyResult,
    InitializeResult,
    LiquidityResult,
    RemoveLiquidityResult,
    SellResult,
)
from src.pm_router.domain.scope import SweepReport, router_scope
from src.pm_token.domain.protocols import FungibleAsset
from src.pm_vault.domain.vault import CollateralVault

logger = logging.getLogger(__name__)


class MarketRouter:
    def __init__(
        self,
        account: str,
        collateral: FungibleAsset,
        vault: CollateralVault,
        market: MarketBackend,
    ) -> None:
        self.account = account
        self.collateral = collateral
        self.vault = vault
        self.market = market

    # ------------------------------------------------------------------
    # Building blocks (only valid inside a router scope)
    # ------------------------------------------------------------------

    def _assets(self) -> tuple[FungibleAsset, ...]:
        return (self.collateral, self.vault.token_si, self.vault.token_no, self.market.lp_token)

    def _scope(self, caller: str) -> AbstractContextManager[SweepReport]:
        return router_scope(self.account, caller, self._assets())

    def _pull(self, asset: FungibleAsset, caller: str, amount: int) -> None:
        asset.transfer_from(self.account, caller, self.account, amount)

    def _mint_pair(self, caller: str, amount: int) -> None:
        self._pull(self.collateral, caller, amount)
        self.collateral.approve(self.account, self.vault.account, amount)
        self.vault.mint(self.account, amount)

    def _swap(self, amount: int, side_in: Side) -> int:
        self.vault.token(side_in).approve(self.account, self.market.account, amount)
        return self.market.swap(self.account, amount, side_in)

    def _deposit(self, amount_si: int, amount_no: int) -> int:
        self.vault.token_si.approve(self.account, self.market.account, amount_si)
        self.vault.token_no.approve(self.account, self.market.account, amount_no)
        return self.market.add_liquidity(self.account, amount_si, amount_no)

    def _reserves(self, side: Side) -> tuple[int, int]:
        """(reserve of side, reserve of the opposite side)."""
        reserve_si, reserve_no = self.market.get_reserves()
        return (reserve_si, reserve_no) if side is Side.SI else (reserve_no, reserve_si)

    def is_initialized(self) -> bool:
        return self.market.lp_token.total_supply > 0

    # ------------------------------------------------------------------
    # User-facing operations
    # ------------------------------------------------------------------

    def initialize(self, caller: str, collateral: int, risk_percent: int) -> InitializeResult:
        """Seed the market once with a risk-skewed pair.

        risk_percent of the minted SI is withheld from the deposit and handed
        to the caller, so the pool starts SI-scarce: implied SI probability
        c / (2c - skew), 0.5 at 0 % and rising with risk.
        """
        validate_amount(collateral, "collateral")
        validate_risk_percent(risk_percent)
        if self.is_initialized():
            raise AlreadyInitializedError()
        skew = solver.risk_skew(collateral, risk_percent)
        with self._scope(caller) as report:
            self._mint_pair(caller, collateral)
            shares = self._deposit(collateral - skew, collateral)
        reserve_si, reserve_no = self.market.get_reserves()
        logger.info(
            "Pool initialized: router=%s collateral=%d risk=%d%% reserves=(%d, %d)",
            self.account,
            collateral,
            risk_percent,
            reserve_si,
            reserve_no,
        )
        return InitializeResult(
            collateral_in=collateral,
            risk_percent=risk_percent,
            skew_si=report.get(self.vault.token_si.symbol),
            shares_out=shares,
            reserve_si=reserve_si,
            reserve_no=reserve_no,
        )

    def buy_side(self, caller: str, collateral: int, side: Side) -> BuyResult:
        """Mint a pair and swap the whole opposite leg into ``side``."""
        validate_amount(collateral, "collateral")
        with self._scope(caller) as report:
            self._mint_pair(caller, collateral)
            swap_out = self._swap(collateral, side.opposite)
        amount_out = report.get(self.vault.token(side).symbol)
        logger.debug("Buy %s: caller=%s in=%d out=%d", side.value, caller, collateral, amount_out)
        return BuyResult(
            side=side, collateral_in=collateral, swap_out=swap_out, amount_out=amount_out
        )

    def sell_side(self, caller: str, token_amount: int, side: Side) -> SellResult:
        """Swap part of ``side`` into the opposite side and burn the equal pair."""
        validate_amount(token_amount, "token_amount")
        with self._scope(caller) as report:
            self._pull(self.vault.token(side), caller, token_amount)
            x = solver.solve_sell_swap(token_amount, *self._reserves(side))
            received = self._swap(x, side)
            pair = min(token_amount - x, received)
            if pair == 0:
                raise InsufficientOutputError("nothing left to redeem")
            self.vault.burn(self.account, pair)
        collateral_out = report.get(self.collateral.symbol)
        dust = report.get(self.vault.token_si.symbol) + report.get(self.vault.token_no.symbol)
        logger.debug(
            "Sell %s: caller=%s in=%d swapped=%d out=%d", side.value, caller, token_amount, x, collateral_out
        )
        return SellResult(
            side=side,
            amount_in=token_amount,
            swapped_in=x,
            collateral_out=collateral_out,
            dust_returned=dust,
        )

    def add_liquidity(self, caller: str, collateral: int) -> LiquidityResult:
        """Mint a pair, balance it against the reserves, deposit it."""
        validate_amount(collateral, "collateral")
        with self._scope(caller) as report:
            self._mint_pair(caller, collateral)
            held_si, held_no = collateral, collateral
            reserve_si, reserve_no = self.market.get_reserves()
            if not self.is_initialized():
                dep_si, dep_no = held_si, held_no
            else:
                side_in, x = solver.solve_zap_swap(collateral, reserve_si, reserve_no)
                if x and curve.get_amount_out(x, *self._reserves(side_in)):
                    received = self._swap(x, side_in)
                    if side_in is Side.SI:
                        held_si, held_no = held_si - x, held_no + received
                    else:
                        held_si, held_no = held_si + received, held_no - x
                dep_si, dep_no = solver.balanced_deposit(held_si, held_no, *self.market.get_reserves())
            shares = self._deposit(dep_si, dep_no)
        return self._liquidity_result(collateral, shares, dep_si, dep_no, report)

    def add_liquidity_zap(self, caller: str, collateral: int) -> LiquidityResult:
        """Single-asset entry point: collateral in, liquidity shares out."""
        return self.add_liquidity(caller, collateral)

    def remove_liquidity(self, caller: str, lp_amount: int) -> RemoveLiquidityResult:
        """Redeem shares for SI and NO (caller approves the router on the share token)."""
        validate_amount(lp_amount, "lp_amount")
        with self._scope(caller):
            self._pull(self.market.lp_token, caller, lp_amount)
            amount_si, amount_no = self.market.remove_liquidity(self.account, lp_amount)
        return RemoveLiquidityResult(shares_in=lp_amount, amount_si=amount_si, amount_no=amount_no)

    def _liquidity_result(
        self, collateral: int, shares: int, dep_si: int, dep_no: int, report: SweepReport
    ) -> LiquidityResult:
        return LiquidityResult(
            collateral_in=collateral,
            shares_out=shares,
            deposited_si=dep_si,
            deposited_no=dep_no,
            refund_si=report.get(self.vault.token_si.symbol),
            refund_no=report.get(self.vault.token_no.symbol),
        )
