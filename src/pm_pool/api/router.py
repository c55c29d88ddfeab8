"""pm_pool REST endpoints.

POST /pools                              — create a pool (no liquidity yet)
GET  /pools                              — list pools in creation order
GET  /pools/{pool_id}                    — reserves, supply, implied probability
POST /pools/{pool_id}/initialize         — seed liquidity with a risk skew
POST /pools/{pool_id}/buy                — collateral → SI or NO
POST /pools/{pool_id}/sell               — SI or NO → collateral
POST /pools/{pool_id}/liquidity          — single-sided collateral deposit
POST /pools/{pool_id}/liquidity/zap      — same, zap entry point
POST /pools/{pool_id}/liquidity/remove   — burn shares for SI + NO
POST /pools/{pool_id}/resolve            — fix the SI payout scale
POST /pools/{pool_id}/claim              — redeem SI or NO after resolution
GET  /pools/{pool_id}/invariants         — audit vault, market and router
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from config.settings import settings
from src.pm_common.response import ApiResponse, success_response
from src.pm_pool.api.dependencies import get_pool_service
from src.pm_pool.application.schemas import (
    AddLiquidityRequest,
    BuyRequest,
    ClaimRequest,
    CreatePoolRequest,
    InitializeRequest,
    RemoveLiquidityRequest,
    ResolveRequest,
    SellRequest,
)
from src.pm_pool.application.service import PoolApplicationService

router = APIRouter(prefix="/pools", tags=["pools"])

ServiceDep = Annotated[PoolApplicationService, Depends(get_pool_service)]


def _wrap(request: Request, data: object) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("", status_code=201)
async def create_pool(body: CreatePoolRequest, request: Request, service: ServiceDep) -> ApiResponse:
    backend = body.backend or settings.DEFAULT_MARKET_BACKEND
    result = await service.create_pool(body.name, body.symbol_si, body.symbol_no, backend)
    return _wrap(request, result.model_dump())


@router.get("")
async def list_pools(request: Request, service: ServiceDep) -> ApiResponse:
    result = await service.list_pools()
    return _wrap(request, result.model_dump())


@router.get("/{pool_id}")
async def get_pool(pool_id: str, request: Request, service: ServiceDep) -> ApiResponse:
    result = await service.get_pool(pool_id)
    return _wrap(request, result.model_dump())


@router.post("/{pool_id}/initialize")
async def initialize(
    pool_id: str, body: InitializeRequest, request: Request, service: ServiceDep
) -> ApiResponse:
    result = await service.initialize(
        pool_id, body.account, body.collateral_amount, body.risk_percent
    )
    return _wrap(request, result)


@router.post("/{pool_id}/buy")
async def buy(pool_id: str, body: BuyRequest, request: Request, service: ServiceDep) -> ApiResponse:
    result = await service.buy(pool_id, body.account, body.collateral_amount, body.side)
    return _wrap(request, result)


@router.post("/{pool_id}/sell")
async def sell(pool_id: str, body: SellRequest, request: Request, service: ServiceDep) -> ApiResponse:
    result = await service.sell(pool_id, body.account, body.token_amount, body.side)
    return _wrap(request, result)


@router.post("/{pool_id}/liquidity")
async def add_liquidity(
    pool_id: str, body: AddLiquidityRequest, request: Request, service: ServiceDep
) -> ApiResponse:
    result = await service.add_liquidity(pool_id, body.account, body.collateral_amount)
    return _wrap(request, result)


@router.post("/{pool_id}/liquidity/zap")
async def add_liquidity_zap(
    pool_id: str, body: AddLiquidityRequest, request: Request, service: ServiceDep
) -> ApiResponse:
    result = await service.add_liquidity(pool_id, body.account, body.collateral_amount, zap=True)
    return _wrap(request, result)


@router.post("/{pool_id}/liquidity/remove")
async def remove_liquidity(
    pool_id: str, body: RemoveLiquidityRequest, request: Request, service: ServiceDep
) -> ApiResponse:
    result = await service.remove_liquidity(pool_id, body.account, body.lp_amount)
    return _wrap(request, result)


@router.post("/{pool_id}/resolve")
async def resolve(
    pool_id: str, body: ResolveRequest, request: Request, service: ServiceDep
) -> ApiResponse:
    result = await service.resolve(pool_id, body.scale)
    return _wrap(request, result.model_dump())


@router.post("/{pool_id}/claim")
async def claim(pool_id: str, body: ClaimRequest, request: Request, service: ServiceDep) -> ApiResponse:
    result = await service.claim(pool_id, body.account, body.amount, body.side)
    return _wrap(request, result.model_dump())


@router.get("/{pool_id}/invariants")
async def invariants(pool_id: str, request: Request, service: ServiceDep) -> ApiResponse:
    result = await service.verify_invariants(pool_id)
    return _wrap(request, result.model_dump())
