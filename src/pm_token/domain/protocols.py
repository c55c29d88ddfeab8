# src/pm_token/domain/protocols.py
"""Fungible asset Protocol — the only surface the engine uses on assets.

Vault, market and router talk to collateral, claim tokens and liquidity
shares exclusively through this capability set, so any ledger conforming to
it (in-memory, persisted, remote) can back a pool.
"""

from typing import Protocol


class FungibleAsset(Protocol):
    symbol: str

    def balance_of(self, owner: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def transfer(self, sender: str, to: str, amount: int) -> None: ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None: ...

    def approve(self, owner: str, spender: str, amount: int) -> None: ...


class MintableAsset(FungibleAsset, Protocol):
    """Asset whose supply is controlled by a single minter account."""

    minter: str

    @property
    def total_supply(self) -> int: ...

    def mint(self, caller: str, to: str, amount: int) -> None: ...

    def burn(self, caller: str, owner: str, amount: int) -> None: ...

    def holders(self) -> dict[str, int]:
        """Non-zero balances by owner, for supply audits."""
        ...
