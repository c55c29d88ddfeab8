"""RouterScope — one router invocation as a scoped transaction.

Entering opens a savepoint; every vault / market / token mutation made
inside joins it. On any exception the whole call is rolled back, which also
returns the router's balances to zero. On success every asset the router
touched is swept to the caller, and a non-zero residual aborts the call.
"""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from src.pm_common.errors import SweepError
from src.pm_common.savepoint import savepoint
from src.pm_token.domain.protocols import FungibleAsset

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """Amounts forwarded to the caller, keyed by asset symbol."""

    swept: dict[str, int] = field(default_factory=dict)

    def get(self, symbol: str) -> int:
        return self.swept.get(symbol, 0)


def sweep(account: str, caller: str, assets: Iterable[FungibleAsset]) -> SweepReport:
    report = SweepReport()
    for asset in assets:
        balance = asset.balance_of(account)
        if balance:
            asset.transfer(account, caller, balance)
            report.swept[asset.symbol] = report.swept.get(asset.symbol, 0) + balance
        residual = asset.balance_of(account)
        if residual:
            raise SweepError(asset.symbol, residual)
    return report


@contextmanager
def router_scope(
    account: str, caller: str, assets: Iterable[FungibleAsset]
) -> Iterator[SweepReport]:
    assets = tuple(assets)
    report = SweepReport()
    with savepoint():
        yield report
        report.swept.update(sweep(account, caller, assets).swept)
    logger.debug("Router %s swept to %s: %s", account, caller, report.swept)
