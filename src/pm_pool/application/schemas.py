"""Pydantic schemas for pm_pool API requests and responses.

Amounts are 18-decimal base-unit integers; ``*_display`` fields carry a
human-readable rendering for dashboards.
"""

from pydantic import BaseModel, Field

from src.pm_amm.domain.curve import implied_probability
from src.pm_common.enums import MarketBackendKind, PoolStatus, Side
from src.pm_common.fixed_point import WAD, wad_to_display
from src.pm_pool.domain.models import AccountBalances, PoolHandles

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreatePoolRequest(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    symbol_si: str = Field(min_length=1, max_length=16)
    symbol_no: str = Field(min_length=1, max_length=16)
    backend: MarketBackendKind | None = None


class InitializeRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    collateral_amount: int = Field(gt=0)
    risk_percent: int = Field(ge=0, lt=100)


class BuyRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    collateral_amount: int = Field(gt=0)
    side: Side


class SellRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    token_amount: int = Field(gt=0)
    side: Side


class AddLiquidityRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    collateral_amount: int = Field(gt=0)


class RemoveLiquidityRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    lp_amount: int = Field(gt=0)


class ResolveRequest(BaseModel):
    scale: int = Field(ge=0, le=WAD, description="SI payout per unit, 1e18 = 1.0")


class ClaimRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    amount: int = Field(gt=0)
    side: Side


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class PoolDetail(BaseModel):
    id: str
    name: str
    status: PoolStatus
    backend: MarketBackendKind
    symbol_si: str
    symbol_no: str
    collateral_symbol: str
    reserve_si: int
    reserve_no: int
    lp_supply: int
    vault_collateral: int
    vault_collateral_display: str
    implied_probability_si: int
    implied_probability_display: str
    resolved: bool
    scale: int | None
    created_at: str

    @classmethod
    def from_handles(cls, p: PoolHandles) -> "PoolDetail":
        reserve_si, reserve_no = p.market.get_reserves()
        prob = implied_probability(reserve_si, reserve_no)
        return cls(
            id=p.pool_id,
            name=p.name,
            status=p.status,
            backend=p.backend,
            symbol_si=p.token_si.symbol,
            symbol_no=p.token_no.symbol,
            collateral_symbol=p.collateral.symbol,
            reserve_si=reserve_si,
            reserve_no=reserve_no,
            lp_supply=p.market.lp_token.total_supply,
            vault_collateral=p.vault.collateral_reserve,
            vault_collateral_display=wad_to_display(p.vault.collateral_reserve),
            implied_probability_si=prob,
            implied_probability_display=f"{wad_to_display(prob * 100, 2)}%",
            resolved=p.vault.resolved,
            scale=p.vault.scale if p.vault.resolved else None,
            created_at=p.created_at.isoformat(),
        )


class PoolListResponse(BaseModel):
    items: list[PoolDetail]


class BalancesResponse(BaseModel):
    account: str
    pool_id: str
    collateral: int
    si: int
    no: int
    lp_shares: int

    @classmethod
    def from_domain(cls, b: AccountBalances) -> "BalancesResponse":
        return cls(
            account=b.account,
            pool_id=b.pool_id,
            collateral=b.collateral,
            si=b.si,
            no=b.no,
            lp_shares=b.lp_shares,
        )


class ClaimResponse(BaseModel):
    pool_id: str
    side: Side
    amount: int
    payout: int


class InvariantReport(BaseModel):
    pool_id: str
    ok: bool
    violations: list[str]
