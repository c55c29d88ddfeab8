"""In-memory fungible token ledger.

Backs the collateral asset, the SI/NO claim tokens and the liquidity shares.
Balances and allowances are plain dicts; every write goes through
``track_item`` so an enclosing savepoint can undo it.
"""

import logging

from src.pm_common.errors import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    NotMinterError,
)
from src.pm_common.fixed_point import checked
from src.pm_common.savepoint import atomic, track_attr, track_item

logger = logging.getLogger(__name__)


class FungibleToken:
    def __init__(self, name: str, symbol: str, minter: str) -> None:
        self.name = name
        self.symbol = symbol
        self.minter = minter
        self._total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}

    def __repr__(self) -> str:
        return f"FungibleToken({self.symbol!r}, supply={self._total_supply})"

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, owner: str) -> int:
        return self._balances.get(owner, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def holders(self) -> dict[str, int]:
        """Non-zero balances, for audits."""
        return {k: v for k, v in self._balances.items() if v}

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    @atomic
    def transfer(self, sender: str, to: str, amount: int) -> None:
        self._move(sender, to, checked(amount))

    @atomic
    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """Move ``amount`` from owner to ``to`` using spender's allowance."""
        checked(amount)
        if spender != owner:
            approved = self.allowance(owner, spender)
            if approved < amount:
                raise InsufficientAllowanceError(self.symbol, amount, approved)
            self._set_allowance(owner, spender, approved - amount)
        self._move(owner, to, amount)

    @atomic
    def approve(self, owner: str, spender: str, amount: int) -> None:
        self._set_allowance(owner, spender, checked(amount))

    # ------------------------------------------------------------------
    # Supply (minter only)
    # ------------------------------------------------------------------

    @atomic
    def mint(self, caller: str, to: str, amount: int) -> None:
        self._require_minter(caller)
        track_attr(self, "_total_supply")
        self._total_supply = checked(self._total_supply + checked(amount))
        self._set_balance(to, self.balance_of(to) + amount)
        logger.debug("%s mint %d -> %s", self.symbol, amount, to)

    @atomic
    def burn(self, caller: str, owner: str, amount: int) -> None:
        self._require_minter(caller)
        available = self.balance_of(owner)
        if available < checked(amount):
            raise InsufficientBalanceError(self.symbol, amount, available)
        self._set_balance(owner, available - amount)
        track_attr(self, "_total_supply")
        self._total_supply -= amount
        logger.debug("%s burn %d <- %s", self.symbol, amount, owner)

    # ------------------------------------------------------------------

    def _require_minter(self, caller: str) -> None:
        if caller != self.minter:
            raise NotMinterError(self.symbol, caller)

    def _move(self, sender: str, to: str, amount: int) -> None:
        available = self.balance_of(sender)
        if available < amount:
            raise InsufficientBalanceError(self.symbol, amount, available)
        if amount == 0 or sender == to:
            return
        self._set_balance(sender, available - amount)
        self._set_balance(to, self.balance_of(to) + amount)

    def _set_balance(self, owner: str, value: int) -> None:
        track_item(self._balances, owner)
        if value:
            self._balances[owner] = value
        else:
            self._balances.pop(owner, None)

    def _set_allowance(self, owner: str, spender: str, value: int) -> None:
        key = (owner, spender)
        track_item(self._allowances, key)
        if value:
            self._allowances[key] = value
        else:
            self._allowances.pop(key, None)
