"""Domain models for pm_pool — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime

from src.pm_amm.domain.protocols import MarketBackend
from src.pm_common.enums import MarketBackendKind, PoolStatus
from src.pm_router.domain.router import MarketRouter
from src.pm_token.domain.token import FungibleToken
from src.pm_vault.domain.vault import CollateralVault


@dataclass
class PoolHandles:
    """Side-table row: every component of one pool, keyed by pool_id.

    Components never reference each other through the pool; the registry is
    the only place that knows which vault, market and router belong together.
    """

    pool_id: str
    name: str
    backend: MarketBackendKind
    collateral: FungibleToken
    token_si: FungibleToken
    token_no: FungibleToken
    vault: CollateralVault
    market: MarketBackend
    router: MarketRouter
    created_at: datetime

    @property
    def status(self) -> PoolStatus:
        if self.vault.resolved:
            return PoolStatus.RESOLVED
        if self.router.is_initialized():
            return PoolStatus.ACTIVE
        return PoolStatus.CREATED


@dataclass
class AccountBalances:
    account: str
    pool_id: str
    collateral: int
    si: int
    no: int
    lp_shares: int
