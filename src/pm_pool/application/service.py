"""PoolApplicationService — serialized entry point for every pool operation.

Each pool gets its own asyncio.Lock; every router, vault and read operation
on that pool runs under it, so a resolve can never interleave with a trade
and the vault's ``resolved`` check always sees the latest state. Distinct
pools do not contend.

The engine calls are synchronous and never suspend inside the lock. The
service also plays the wallet role: it approves the router for exactly the
amount being spent right before the call.
"""

import asyncio
from collections import defaultdict
from dataclasses import asdict
from typing import Any

from src.pm_common.enums import MarketBackendKind, Side
from src.pm_common.errors import InvalidAmountError
from src.pm_common.savepoint import savepoint
from src.pm_pool.application.schemas import (
    BalancesResponse,
    ClaimResponse,
    InvariantReport,
    PoolDetail,
    PoolListResponse,
)
from src.pm_pool.domain.invariants import verify_pool_invariants
from src.pm_pool.domain.models import PoolHandles
from src.pm_pool.domain.registry import PoolRegistry
from src.pm_token.domain.protocols import FungibleAsset


class PoolApplicationService:
    def __init__(self, registry: PoolRegistry) -> None:
        self._registry = registry
        self._pool_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def registry(self) -> PoolRegistry:
        return self._registry

    def _get_or_create_lock(self, pool_id: str) -> asyncio.Lock:
        return self._pool_locks[pool_id]

    @staticmethod
    def _approve_router(pool: PoolHandles, asset: FungibleAsset, account: str, amount: int) -> None:
        asset.approve(account, pool.router.account, amount)

    # ------------------------------------------------------------------
    # Pools
    # ------------------------------------------------------------------

    async def create_pool(
        self, name: str, symbol_si: str, symbol_no: str, backend: MarketBackendKind
    ) -> PoolDetail:
        pool = self._registry.create_pool(name, symbol_si, symbol_no, backend)
        return PoolDetail.from_handles(pool)

    async def list_pools(self) -> PoolListResponse:
        return PoolListResponse(
            items=[PoolDetail.from_handles(p) for p in self._registry.list_pools()]
        )

    async def get_pool(self, pool_id: str) -> PoolDetail:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            return PoolDetail.from_handles(pool)

    # ------------------------------------------------------------------
    # Router operations
    # ------------------------------------------------------------------

    async def initialize(
        self, pool_id: str, account: str, collateral_amount: int, risk_percent: int
    ) -> dict[str, Any]:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            with savepoint():
                self._approve_router(pool, pool.collateral, account, collateral_amount)
                result = pool.router.initialize(account, collateral_amount, risk_percent)
        return asdict(result)

    async def buy(
        self, pool_id: str, account: str, collateral_amount: int, side: Side
    ) -> dict[str, Any]:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            with savepoint():
                self._approve_router(pool, pool.collateral, account, collateral_amount)
                result = pool.router.buy_side(account, collateral_amount, side)
        return asdict(result)

    async def sell(
        self, pool_id: str, account: str, token_amount: int, side: Side
    ) -> dict[str, Any]:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            with savepoint():
                self._approve_router(pool, pool.vault.token(side), account, token_amount)
                result = pool.router.sell_side(account, token_amount, side)
        return asdict(result)

    async def add_liquidity(
        self, pool_id: str, account: str, collateral_amount: int, zap: bool = False
    ) -> dict[str, Any]:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            with savepoint():
                self._approve_router(pool, pool.collateral, account, collateral_amount)
                if zap:
                    result = pool.router.add_liquidity_zap(account, collateral_amount)
                else:
                    result = pool.router.add_liquidity(account, collateral_amount)
        return asdict(result)

    async def remove_liquidity(self, pool_id: str, account: str, lp_amount: int) -> dict[str, Any]:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            with savepoint():
                self._approve_router(pool, pool.market.lp_token, account, lp_amount)
                result = pool.router.remove_liquidity(account, lp_amount)
        return asdict(result)

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    async def resolve(self, pool_id: str, scale: int) -> PoolDetail:
        """Resolution authority entry point; callers are assumed authorized."""
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            pool.vault.resolve(scale)
            return PoolDetail.from_handles(pool)

    async def claim(self, pool_id: str, account: str, amount: int, side: Side) -> ClaimResponse:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            payout = pool.vault.claim(account, amount, side)
        return ClaimResponse(pool_id=pool_id, side=side, amount=amount, payout=payout)

    # ------------------------------------------------------------------
    # Accounts & audits
    # ------------------------------------------------------------------

    async def balances(self, pool_id: str, account: str) -> BalancesResponse:
        self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            return BalancesResponse.from_domain(self._registry.balances(pool_id, account))

    async def faucet(self, account: str, amount: int, max_amount: int) -> int:
        if amount > max_amount:
            raise InvalidAmountError(amount)
        return self._registry.faucet(account, amount)

    async def verify_invariants(self, pool_id: str) -> InvariantReport:
        pool = self._registry.get_pool(pool_id)
        async with self._get_or_create_lock(pool_id):
            violations = verify_pool_invariants(pool)
        return InvariantReport(pool_id=pool_id, ok=not violations, violations=violations)
