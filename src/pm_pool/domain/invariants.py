# src/pm_pool/domain/invariants.py
"""Whole-pool audit: vault conservation plus market and router bookkeeping.

INV-M1: market reserves == SI/NO balances held by the market account
INV-M2: sum(liquidity share balances) == share supply
INV-R:  router holds nothing between calls
"""

import logging

from src.pm_pool.domain.models import PoolHandles
from src.pm_vault.domain.invariants import verify_vault_invariants

logger = logging.getLogger(__name__)


def verify_pool_invariants(pool: PoolHandles) -> list[str]:
    """Returns list of violation strings across vault, market and router."""
    violations: list[str] = []

    reserve_si, reserve_no = pool.market.get_reserves()
    held_si = pool.token_si.balance_of(pool.market.account)
    held_no = pool.token_no.balance_of(pool.market.account)
    if (reserve_si, reserve_no) != (held_si, held_no):
        violations.append(
            f"INV-M1 violated: reserves=({reserve_si}, {reserve_no}) "
            f"!= market balances=({held_si}, {held_no})"
        )

    lp = pool.market.lp_token
    share_sum = sum(lp.holders().values())
    if share_sum != lp.total_supply:
        violations.append(f"INV-M2 violated: sum(shares)={share_sum} != supply={lp.total_supply}")

    router = pool.router.account
    for asset in (pool.collateral, pool.token_si, pool.token_no, lp):
        residual = asset.balance_of(router)
        if residual:
            violations.append(f"INV-R violated: router holds {residual} {asset.symbol}")

    for msg in violations:
        logger.error("%s (pool=%s)", msg, pool.pool_id)
    return verify_vault_invariants(pool.vault) + violations
