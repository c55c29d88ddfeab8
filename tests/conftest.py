"""Shared test fixtures."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pm_pool.api.dependencies import get_pool_service
from src.pm_pool.application.service import PoolApplicationService
from src.pm_pool.domain.models import PoolHandles
from src.pm_pool.domain.registry import PoolRegistry


@pytest.fixture
def registry() -> PoolRegistry:
    return PoolRegistry()


@pytest.fixture
def pool(registry: PoolRegistry) -> PoolHandles:
    """A freshly created, not yet initialized native pool."""
    return registry.create_pool("Rain in Lisbon tomorrow", "SI", "NO")


@pytest.fixture
def service(registry: PoolRegistry) -> PoolApplicationService:
    return PoolApplicationService(registry)


@pytest.fixture
async def client(service: PoolApplicationService) -> AsyncIterator[AsyncClient]:
    """Async HTTP client bound to an isolated in-memory registry."""
    app.dependency_overrides[get_pool_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
