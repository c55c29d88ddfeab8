"""Tests for pm_pool.domain.registry — pool factory and side table."""

import pytest

from src.pm_amm.domain.market import OutcomePairMarket
from src.pm_common.enums import PoolStatus, Side
from src.pm_common.errors import InvalidPoolSpecError, PoolNotFoundError, ZeroInputError
from src.pm_common.fixed_point import WAD
from src.pm_pool.domain.models import PoolHandles
from src.pm_pool.domain.registry import PoolRegistry


class TestCreatePool:
    def test_wires_components(self, pool: PoolHandles) -> None:
        assert isinstance(pool.market, OutcomePairMarket)
        assert pool.vault.account == f"vault:{pool.pool_id}"
        assert pool.market.account == f"market:{pool.pool_id}"
        assert pool.router.account == f"router:{pool.pool_id}"
        assert pool.token_si.minter == pool.vault.account
        assert pool.market.lp_token.symbol == "SI-NO-LP"
        assert pool.status is PoolStatus.CREATED

    def test_shared_collateral(self, registry: PoolRegistry) -> None:
        a = registry.create_pool("A", "ASI", "ANO")
        b = registry.create_pool("B", "BSI", "BNO")
        assert a.collateral is b.collateral is registry.collateral
        assert a.pool_id != b.pool_id

    @pytest.mark.parametrize(("si", "no"), [("X", "X"), ("USDC", "NO"), ("SI", "USDC")])
    def test_symbols_must_be_distinct(self, registry: PoolRegistry, si: str, no: str) -> None:
        with pytest.raises(InvalidPoolSpecError):
            registry.create_pool("bad", si, no)
        assert registry.list_pools() == []


class TestLookup:
    def test_get_pool(self, registry: PoolRegistry, pool: PoolHandles) -> None:
        assert registry.get_pool(pool.pool_id) is pool

    def test_unknown_pool(self, registry: PoolRegistry) -> None:
        with pytest.raises(PoolNotFoundError):
            registry.get_pool("nope")

    def test_list_in_creation_order(self, registry: PoolRegistry) -> None:
        pools = [registry.create_pool(f"p{i}", f"S{i}", f"N{i}") for i in range(3)]
        assert registry.list_pools() == pools


class TestFaucetAndBalances:
    def test_faucet_returns_balance(self, registry: PoolRegistry) -> None:
        assert registry.faucet("alice", 5 * WAD) == 5 * WAD
        assert registry.faucet("alice", WAD) == 6 * WAD
        assert registry.collateral.total_supply == 6 * WAD

    def test_faucet_zero(self, registry: PoolRegistry) -> None:
        with pytest.raises(ZeroInputError):
            registry.faucet("alice", 0)

    def test_balances_snapshot(self, registry: PoolRegistry, pool: PoolHandles) -> None:
        registry.faucet("lp", 1000 * WAD)
        pool.collateral.approve("lp", pool.router.account, 1000 * WAD)
        pool.router.initialize("lp", 1000 * WAD, 10)
        registry.faucet("lp", 7)

        b = registry.balances(pool.pool_id, "lp")
        assert b.collateral == 7
        assert b.si == 100 * WAD
        assert b.no == 0
        assert b.lp_shares == pool.market.lp_token.balance_of("lp") > 0


class TestStatus:
    def test_lifecycle(self, registry: PoolRegistry, pool: PoolHandles) -> None:
        assert pool.status is PoolStatus.CREATED
        registry.faucet("lp", 10 * WAD)
        pool.collateral.approve("lp", pool.router.account, 10 * WAD)
        pool.router.initialize("lp", 10 * WAD, 0)
        assert pool.status is PoolStatus.ACTIVE
        pool.vault.resolve(WAD)
        assert pool.status is PoolStatus.RESOLVED

    def test_side_opposite(self) -> None:
        assert Side.SI.opposite is Side.NO
        assert Side.NO.opposite is Side.SI
