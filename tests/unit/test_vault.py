"""Tests for pm_vault — CollateralVault mint / burn / resolve / claim."""

import pytest

from src.pm_common.enums import Side
from src.pm_common.errors import (
    AlreadyResolvedError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidScaleError,
    NotResolvedError,
    ZeroInputError,
)
from src.pm_common.fixed_point import WAD
from src.pm_token.domain.token import FungibleToken
from src.pm_vault.domain.invariants import verify_vault_invariants
from src.pm_vault.domain.vault import CollateralVault


@pytest.fixture
def vault() -> CollateralVault:
    collateral = FungibleToken("Mock USD Coin", "USDC", minter="faucet")
    si = FungibleToken("Rain SI", "SI", minter="vault")
    no = FungibleToken("Rain NO", "NO", minter="vault")
    return CollateralVault("vault", collateral, si, no)


def _fund(vault: CollateralVault, account: str, amount: int) -> None:
    vault.collateral.mint("faucet", account, amount)  # type: ignore[attr-defined]
    vault.collateral.approve(account, vault.account, amount)


def _mint(vault: CollateralVault, account: str, amount: int) -> None:
    _fund(vault, account, amount)
    vault.mint(account, amount)


class TestMint:
    def test_credits_both_claims(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 10 * WAD)
        assert vault.token_si.balance_of("alice") == 10 * WAD
        assert vault.token_no.balance_of("alice") == 10 * WAD
        assert vault.collateral_reserve == 10 * WAD
        assert vault.collateral.balance_of("alice") == 0

    def test_requires_allowance(self, vault: CollateralVault) -> None:
        vault.collateral.mint("faucet", "alice", WAD)  # type: ignore[attr-defined]
        with pytest.raises(InsufficientAllowanceError):
            vault.mint("alice", WAD)
        assert vault.token_si.total_supply == 0
        assert vault.collateral.balance_of("alice") == WAD

    def test_requires_balance(self, vault: CollateralVault) -> None:
        vault.collateral.approve("alice", vault.account, WAD)
        with pytest.raises(InsufficientBalanceError):
            vault.mint("alice", WAD)
        assert vault.token_no.total_supply == 0

    def test_zero_amount(self, vault: CollateralVault) -> None:
        with pytest.raises(ZeroInputError):
            vault.mint("alice", 0)


class TestBurn:
    @pytest.mark.parametrize("amount", [1, WAD, 123_456_789_012_345_678_901])
    def test_mint_then_burn_roundtrip(self, vault: CollateralVault, amount: int) -> None:
        _mint(vault, "alice", amount)
        vault.burn("alice", amount)
        assert vault.collateral.balance_of("alice") == amount
        assert vault.collateral_reserve == 0
        assert vault.token_si.total_supply == 0
        assert vault.token_no.total_supply == 0

    def test_needs_both_sides(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 10)
        vault.token_no.transfer("alice", "bob", 5)
        with pytest.raises(InsufficientBalanceError, match="NO"):
            vault.burn("alice", 10)
        assert vault.token_si.balance_of("alice") == 10
        assert vault.collateral_reserve == 10

    def test_rejected_after_resolution(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 10)
        vault.resolve(WAD // 2)
        with pytest.raises(AlreadyResolvedError):
            vault.burn("alice", 10)


class TestResolve:
    def test_resolve_once(self, vault: CollateralVault) -> None:
        vault.resolve(WAD)
        assert vault.resolved is True
        assert vault.scale == WAD
        with pytest.raises(AlreadyResolvedError):
            vault.resolve(0)
        assert vault.scale == WAD

    def test_scale_out_of_range(self, vault: CollateralVault) -> None:
        with pytest.raises(InvalidScaleError):
            vault.resolve(WAD + 1)
        assert vault.resolved is False


class TestClaim:
    def test_before_resolution(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 10)
        with pytest.raises(NotResolvedError):
            vault.claim("alice", 10, Side.SI)

    def test_payouts_floor(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 10)
        vault.resolve(WAD // 3)
        # 10 * 0.333... = 3.33 → 3; 10 * 0.666... = 6.66 → 6
        assert vault.claim("alice", 10, Side.SI) == 3
        assert vault.claim("alice", 10, Side.NO) == 6
        assert vault.collateral.balance_of("alice") == 9
        assert vault.collateral_reserve == 1
        assert vault.token_si.balance_of("alice") == 0

    def test_full_scale(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 7 * WAD)
        vault.resolve(WAD)
        assert vault.claim("alice", 7 * WAD, Side.SI) == 7 * WAD
        assert vault.claim("alice", 7 * WAD, Side.NO) == 0

    def test_insufficient_claim_balance(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 10)
        vault.resolve(WAD // 2)
        with pytest.raises(InsufficientBalanceError):
            vault.claim("alice", 11, Side.NO)
        assert vault.collateral_reserve == 10

    def test_all_claims_never_exceed_collateral(self, vault: CollateralVault) -> None:
        holders = {"alice": 3 * WAD + 7, "bob": 11, "carol": 5 * WAD - 1}
        for account, amount in holders.items():
            _mint(vault, account, amount)
        vault.token_si.transfer("alice", "bob", WAD)
        vault.token_no.transfer("carol", "alice", 3)
        initial = vault.collateral_reserve
        vault.resolve(370_000_000_000_000_001)
        assert verify_vault_invariants(vault) == []

        paid = 0
        for account in holders:
            for side in (Side.SI, Side.NO):
                held = vault.token(side).balance_of(account)
                if held:
                    paid += vault.claim(account, held, side)
        assert paid <= initial
        assert vault.collateral_reserve == initial - paid

    def test_mint_after_resolution_stays_solvent(self, vault: CollateralVault) -> None:
        vault.resolve(WAD // 4)
        _mint(vault, "alice", 100)
        si = vault.claim("alice", 100, Side.SI)
        no = vault.claim("alice", 100, Side.NO)
        assert si + no == 100


class TestVaultInvariants:
    def test_healthy(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 5 * WAD)
        assert verify_vault_invariants(vault) == []

    def test_unbacked_claim_detected(self, vault: CollateralVault) -> None:
        _mint(vault, "alice", 5 * WAD)
        vault.token_si.mint(vault.account, "mallory", 1)
        violations = verify_vault_invariants(vault)
        assert any("INV-1" in v for v in violations)
        assert any("INV-2" in v for v in violations)
