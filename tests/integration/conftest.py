"""Integration-test fixtures.

Every test gets its own in-memory registry through the root ``client``
fixture; these helpers drive it purely over HTTP.
"""

import pytest
from httpx import AsyncClient

WAD = 10**18


@pytest.fixture
async def pool_id(client: AsyncClient) -> str:
    resp = await client.post(
        "/api/v1/pools",
        json={"name": "Rain in Lisbon tomorrow", "symbol_si": "SI", "symbol_no": "NO"},
    )
    assert resp.status_code == 201
    return resp.json()["data"]["id"]


@pytest.fixture
async def live_pool_id(client: AsyncClient, pool_id: str) -> str:
    """Pool seeded with 10 000 collateral at 5 % risk by account ``lp``."""
    await client.post("/api/v1/accounts/lp/faucet", json={"amount": 10_000 * WAD})
    resp = await client.post(
        f"/api/v1/pools/{pool_id}/initialize",
        json={"account": "lp", "collateral_amount": 10_000 * WAD, "risk_percent": 5},
    )
    assert resp.status_code == 200
    return pool_id
