# src/pm_amm/domain/protocols.py
"""MarketBackend Protocol — what the router needs from an outcome market.

OutcomePairMarket implements it natively; PairMarketAdapter implements it on
top of a generic two-token exchange pair. The router never imports either
concrete class.

Token movement contract: inputs are pulled from ``caller`` with
``transfer_from`` (``account`` as spender, so the caller approves first);
outputs and minted shares are paid to ``caller``.
"""

from typing import Protocol

from src.pm_common.enums import Side
from src.pm_token.domain.protocols import MintableAsset


class MarketBackend(Protocol):
    account: str

    @property
    def lp_token(self) -> MintableAsset: ...

    def get_reserves(self) -> tuple[int, int]:
        """(reserve_si, reserve_no)."""
        ...

    def swap(self, caller: str, amount_in: int, side_in: Side) -> int: ...

    def add_liquidity(self, caller: str, amount_si: int, amount_no: int) -> int: ...

    def remove_liquidity(self, caller: str, lp_amount: int) -> tuple[int, int]: ...
