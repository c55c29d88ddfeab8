"""Tests for pm_pool.domain.invariants — whole-pool audit."""

import pytest

from src.pm_common.enums import Side
from src.pm_common.fixed_point import WAD
from src.pm_pool.domain.invariants import verify_pool_invariants
from src.pm_pool.domain.models import PoolHandles
from src.pm_pool.domain.registry import PoolRegistry


@pytest.fixture
def traded_pool(registry: PoolRegistry, pool: PoolHandles) -> PoolHandles:
    router = pool.router.account
    registry.faucet("lp", 5000 * WAD)
    pool.collateral.approve("lp", router, 5000 * WAD)
    pool.router.initialize("lp", 5000 * WAD, 20)
    registry.faucet("alice", 300 * WAD)
    pool.collateral.approve("alice", router, 300 * WAD)
    pool.router.buy_side("alice", 300 * WAD, Side.NO)
    return pool


class TestVerifyPoolInvariants:
    def test_empty_pool(self, pool: PoolHandles) -> None:
        assert verify_pool_invariants(pool) == []

    def test_after_trading(self, traded_pool: PoolHandles) -> None:
        assert verify_pool_invariants(traded_pool) == []

    def test_reserve_drift(self, traded_pool: PoolHandles) -> None:
        traded_pool.market.reserve_si += 1  # type: ignore[attr-defined]
        violations = verify_pool_invariants(traded_pool)
        assert len(violations) == 1
        assert "INV-M1" in violations[0]

    def test_share_ledger_drift(self, traded_pool: PoolHandles) -> None:
        lp = traded_pool.market.lp_token
        assert sum(lp.holders().values()) == lp.total_supply
        lp._balances["ghost"] = 5  # type: ignore[attr-defined]
        violations = verify_pool_invariants(traded_pool)
        assert len(violations) == 1
        assert violations[0].startswith("INV-M2")

    def test_router_residual(self, registry: PoolRegistry, traded_pool: PoolHandles) -> None:
        registry.faucet(traded_pool.router.account, 5)
        violations = verify_pool_invariants(traded_pool)
        assert any("INV-R" in v and "USDC" in v for v in violations)

    def test_unbacked_claims(self, traded_pool: PoolHandles) -> None:
        traded_pool.token_si.mint(traded_pool.vault.account, "mallory", WAD)
        violations = verify_pool_invariants(traded_pool)
        assert any(v.startswith("INV-1") for v in violations)
        assert any(v.startswith("INV-2") for v in violations)

    def test_logs_violations(
        self, traded_pool: PoolHandles, caplog: pytest.LogCaptureFixture
    ) -> None:
        traded_pool.market.reserve_no -= 1  # type: ignore[attr-defined]
        with caplog.at_level("ERROR"):
            verify_pool_invariants(traded_pool)
        assert "INV-M1" in caplog.text
