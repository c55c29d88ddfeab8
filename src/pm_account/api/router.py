"""pm_account REST API — per-account balances and the mock collateral faucet."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from config.settings import settings
from src.pm_account.application.schemas import FaucetRequest, FaucetResponse
from src.pm_common.fixed_point import wad_to_display
from src.pm_common.response import ApiResponse, success_response
from src.pm_pool.api.dependencies import get_pool_service
from src.pm_pool.application.service import PoolApplicationService

router = APIRouter(prefix="/accounts", tags=["accounts"])

ServiceDep = Annotated[PoolApplicationService, Depends(get_pool_service)]


@router.get("/{account}/balances")
async def get_balances(
    account: str,
    request: Request,
    service: ServiceDep,
    pool_id: str = Query(..., description="Pool whose SI / NO / LP balances to report"),
) -> ApiResponse:
    data = await service.balances(pool_id, account)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{account}/faucet")
async def faucet(
    account: str,
    body: FaucetRequest,
    request: Request,
    service: ServiceDep,
) -> ApiResponse:
    if not settings.FAUCET_ENABLED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Faucet is disabled")
    balance = await service.faucet(account, body.amount, settings.FAUCET_MAX_AMOUNT)
    data = FaucetResponse(
        account=account,
        amount=body.amount,
        collateral_symbol=service.registry.collateral.symbol,
        balance=balance,
        balance_display=wad_to_display(balance),
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
