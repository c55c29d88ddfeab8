"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.pm_account.api.router import router as account_router
from src.pm_common.errors import AppError
from src.pm_common.middleware.request_log import RequestLogMiddleware
from src.pm_common.response import error_response
from src.pm_pool.api.dependencies import get_pool_service
from src.pm_pool.api.router import router as pool_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: report the collateral asset. Shutdown: report pool count."""
    logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
    logger.info(
        "Starting %s: collateral=%s backend=%s faucet=%s",
        settings.APP_NAME,
        settings.COLLATERAL_SYMBOL,
        settings.DEFAULT_MARKET_BACKEND.value,
        "on" if settings.FAUCET_ENABLED else "off",
    )
    yield
    logger.info("Shutting down with %d pool(s) in memory", len(get_pool_service().registry.list_pools()))


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("Engine failure %d: %s", exc.code, exc.message)
    resp = error_response(exc)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(pool_router, prefix="/api/v1")
app.include_router(account_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
