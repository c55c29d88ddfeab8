"""Pydantic schemas for pm_account API."""

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class FaucetRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Mock collateral to mint, 18-decimal base units")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class FaucetResponse(BaseModel):
    account: str
    amount: int
    collateral_symbol: str
    balance: int
    balance_display: str
