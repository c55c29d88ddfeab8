"""FastAPI dependency: get_pool_service.

One registry and one service live for the lifetime of the process. Tests
swap in a fresh instance through ``app.dependency_overrides``.
"""

from config.settings import settings
from src.pm_pool.application.service import PoolApplicationService
from src.pm_pool.domain.registry import PoolRegistry

_service = PoolApplicationService(
    PoolRegistry(settings.COLLATERAL_NAME, settings.COLLATERAL_SYMBOL)
)


def get_pool_service() -> PoolApplicationService:
    return _service
