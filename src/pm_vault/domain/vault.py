"""CollateralVault — 1:1 collateral custody for SI/NO claim pairs.

Pre-resolution the vault is a pure mint/burn machine:
- mint(c): pull c collateral, credit c SI + c NO
- burn(c): destroy c SI + c NO, return c collateral
so collateral_reserve == supply(SI) == supply(NO) at all times.

resolve(scale) happens once and is irreversible. Afterwards each claim
token redeems for a fixed fraction of one collateral unit:
- SI:  floor(amount * scale / 1e18)
- NO:  floor(amount * (1e18 - scale) / 1e18)
Floor rounding means the payouts over the whole outstanding supply can
never exceed the collateral held at resolution time.
"""

import logging

from src.pm_common.enums import Side
from src.pm_common.errors import (
    AlreadyResolvedError,
    InsufficientBalanceError,
    NotResolvedError,
)
from src.pm_common.fixed_point import WAD, mul_div_down, validate_amount, validate_scale
from src.pm_common.savepoint import atomic, track_attr
from src.pm_token.domain.protocols import FungibleAsset, MintableAsset

logger = logging.getLogger(__name__)


class CollateralVault:
    def __init__(
        self,
        account: str,
        collateral: FungibleAsset,
        token_si: MintableAsset,
        token_no: MintableAsset,
    ) -> None:
        self.account = account
        self.collateral = collateral
        self.token_si = token_si
        self.token_no = token_no
        self.resolved = False
        self.scale = 0

    @property
    def collateral_reserve(self) -> int:
        return self.collateral.balance_of(self.account)

    def token(self, side: Side) -> MintableAsset:
        return self.token_si if side is Side.SI else self.token_no

    @atomic
    def mint(self, caller: str, amount: int) -> None:
        """Pull ``amount`` collateral from caller (needs allowance), credit both claims."""
        validate_amount(amount)
        self.collateral.transfer_from(self.account, caller, self.account, amount)
        self.token_si.mint(self.account, caller, amount)
        self.token_no.mint(self.account, caller, amount)
        logger.debug("Vault mint: caller=%s amount=%d", caller, amount)

    @atomic
    def burn(self, caller: str, amount: int) -> None:
        validate_amount(amount)
        if self.resolved:
            raise AlreadyResolvedError()
        for token in (self.token_si, self.token_no):
            held = token.balance_of(caller)
            if held < amount:
                raise InsufficientBalanceError(token.symbol, amount, held)
        self.token_si.burn(self.account, caller, amount)
        self.token_no.burn(self.account, caller, amount)
        self.collateral.transfer(self.account, caller, amount)
        logger.debug("Vault burn: caller=%s amount=%d", caller, amount)

    @atomic
    def resolve(self, scale: int) -> None:
        """Fix the SI settlement ratio. Authorization is the caller's concern."""
        if self.resolved:
            raise AlreadyResolvedError()
        validate_scale(scale)
        track_attr(self, "resolved")
        track_attr(self, "scale")
        self.resolved = True
        self.scale = scale
        logger.info(
            "Vault resolved: account=%s scale=%d collateral=%d",
            self.account,
            scale,
            self.collateral_reserve,
        )

    def preview_claim(self, amount: int, side: Side) -> int:
        if not self.resolved:
            raise NotResolvedError()
        weight = self.scale if side is Side.SI else WAD - self.scale
        return mul_div_down(amount, weight, WAD)

    @atomic
    def claim(self, caller: str, amount: int, side: Side) -> int:
        """Burn ``amount`` of one claim token and pay its settled value. Returns payout."""
        validate_amount(amount)
        if not self.resolved:
            raise NotResolvedError()
        token = self.token(side)
        held = token.balance_of(caller)
        if held < amount:
            raise InsufficientBalanceError(token.symbol, amount, held)
        payout = self.preview_claim(amount, side)
        token.burn(self.account, caller, amount)
        self.collateral.transfer(self.account, caller, payout)
        logger.debug(
            "Vault claim: caller=%s side=%s amount=%d payout=%d",
            caller,
            side.value,
            amount,
            payout,
        )
        return payout
