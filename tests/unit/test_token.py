"""Tests for pm_token.domain.token — in-memory fungible ledger."""

import pytest

from src.pm_common.errors import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    NotMinterError,
)
from src.pm_token.domain.token import FungibleToken


@pytest.fixture
def usdc() -> FungibleToken:
    token = FungibleToken("Mock USD Coin", "USDC", minter="faucet")
    token.mint("faucet", "alice", 100)
    return token


class TestSupply:
    def test_mint_updates_supply_and_balance(self, usdc: FungibleToken) -> None:
        assert usdc.total_supply == 100
        assert usdc.balance_of("alice") == 100

    def test_only_minter_mints(self, usdc: FungibleToken) -> None:
        with pytest.raises(NotMinterError):
            usdc.mint("alice", "alice", 1)
        assert usdc.total_supply == 100

    def test_burn(self, usdc: FungibleToken) -> None:
        usdc.burn("faucet", "alice", 40)
        assert usdc.total_supply == 60
        assert usdc.balance_of("alice") == 60

    def test_burn_more_than_held(self, usdc: FungibleToken) -> None:
        with pytest.raises(InsufficientBalanceError):
            usdc.burn("faucet", "alice", 101)
        assert usdc.total_supply == 100


class TestTransfers:
    def test_transfer(self, usdc: FungibleToken) -> None:
        usdc.transfer("alice", "bob", 30)
        assert usdc.balance_of("alice") == 70
        assert usdc.balance_of("bob") == 30

    def test_transfer_insufficient(self, usdc: FungibleToken) -> None:
        with pytest.raises(InsufficientBalanceError):
            usdc.transfer("alice", "bob", 101)
        assert usdc.balance_of("alice") == 100
        assert usdc.balance_of("bob") == 0

    def test_transfer_from_requires_allowance(self, usdc: FungibleToken) -> None:
        with pytest.raises(InsufficientAllowanceError):
            usdc.transfer_from("vault", "alice", "vault", 10)

    def test_transfer_from_consumes_allowance(self, usdc: FungibleToken) -> None:
        usdc.approve("alice", "vault", 25)
        usdc.transfer_from("vault", "alice", "vault", 10)
        assert usdc.allowance("alice", "vault") == 15
        assert usdc.balance_of("vault") == 10

    def test_owner_as_spender_skips_allowance(self, usdc: FungibleToken) -> None:
        usdc.transfer_from("alice", "alice", "bob", 5)
        assert usdc.balance_of("bob") == 5

    def test_failed_pull_keeps_allowance(self, usdc: FungibleToken) -> None:
        usdc.approve("alice", "vault", 500)
        with pytest.raises(InsufficientBalanceError):
            usdc.transfer_from("vault", "alice", "vault", 500)
        assert usdc.allowance("alice", "vault") == 500

    def test_holders_drops_zero_balances(self, usdc: FungibleToken) -> None:
        usdc.transfer("alice", "bob", 100)
        assert usdc.holders() == {"bob": 100}
