# src/pm_vault/domain/invariants.py
"""Vault conservation checks.

INV-1: supply(SI) == supply(NO)                 (pre-resolution)
INV-2: collateral_reserve == supply(SI)         (pre-resolution)
INV-3: worst-case claims <= collateral_reserve  (post-resolution)
"""

import logging

from src.pm_common.fixed_point import WAD, mul_div_down
from src.pm_vault.domain.vault import CollateralVault

logger = logging.getLogger(__name__)


def verify_vault_invariants(vault: CollateralVault) -> list[str]:
    """Returns list of violation strings (empty when the vault is sound)."""
    violations: list[str] = []
    si = vault.token_si.total_supply
    no = vault.token_no.total_supply
    reserve = vault.collateral_reserve

    if not vault.resolved:
        if si != no:
            violations.append(f"INV-1 violated: supply(SI)={si} != supply(NO)={no}")
        if reserve != si:
            violations.append(f"INV-2 violated: collateral={reserve} != supply(SI)={si}")
    else:
        owed = mul_div_down(si, vault.scale, WAD) + mul_div_down(no, WAD - vault.scale, WAD)
        if owed > reserve:
            violations.append(
                f"INV-3 violated: outstanding claims={owed} > collateral={reserve}"
            )

    for msg in violations:
        logger.error("%s (vault=%s)", msg, vault.account)
    return violations
