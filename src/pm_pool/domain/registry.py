"""PoolRegistry — builds pools and keeps their handles in a side table.

create_pool wires one (SI, NO, vault, market, router) tuple around the
registry's shared collateral token and files it under a snowflake id.
Accounts are namespaced by that id:

    vault:<id>   market:<id>   router:<id>
"""

import logging

from src.pm_amm.domain.market import OutcomePairMarket
from src.pm_amm.domain.pair import ConstantProductPair, PairMarketAdapter
from src.pm_amm.domain.protocols import MarketBackend
from src.pm_common.datetime_utils import utc_now
from src.pm_common.enums import MarketBackendKind
from src.pm_common.errors import InvalidPoolSpecError, PoolNotFoundError
from src.pm_common.fixed_point import validate_amount
from src.pm_common.id_generator import generate_id
from src.pm_pool.domain.models import AccountBalances, PoolHandles
from src.pm_router.domain.router import MarketRouter
from src.pm_token.domain.token import FungibleToken
from src.pm_vault.domain.vault import CollateralVault

logger = logging.getLogger(__name__)

FAUCET_ACCOUNT = "faucet"


class PoolRegistry:
    def __init__(self, collateral_name: str = "Mock USD Coin", collateral_symbol: str = "USDC") -> None:
        self.collateral = FungibleToken(collateral_name, collateral_symbol, minter=FAUCET_ACCOUNT)
        self._pools: dict[str, PoolHandles] = {}

    def create_pool(
        self,
        name: str,
        symbol_si: str,
        symbol_no: str,
        backend: MarketBackendKind = MarketBackendKind.NATIVE,
    ) -> PoolHandles:
        symbols = {symbol_si, symbol_no, self.collateral.symbol}
        if len(symbols) != 3:
            raise InvalidPoolSpecError(
                f"symbols {symbol_si!r}/{symbol_no!r} must differ from each other and "
                f"from {self.collateral.symbol!r}"
            )

        pool_id = generate_id()
        vault_account = f"vault:{pool_id}"
        market_account = f"market:{pool_id}"

        token_si = FungibleToken(f"{name} {symbol_si}", symbol_si, minter=vault_account)
        token_no = FungibleToken(f"{name} {symbol_no}", symbol_no, minter=vault_account)
        vault = CollateralVault(vault_account, self.collateral, token_si, token_no)

        market: MarketBackend
        if backend is MarketBackendKind.PAIR:
            pair = ConstantProductPair(
                market_account, token_si, token_no, lp_symbol=f"{symbol_si}-{symbol_no}-LP"
            )
            market = PairMarketAdapter(pair, token_si, token_no)
        else:
            market = OutcomePairMarket(
                market_account, token_si, token_no, lp_symbol=f"{symbol_si}-{symbol_no}-LP"
            )

        router = MarketRouter(f"router:{pool_id}", self.collateral, vault, market)
        handles = PoolHandles(
            pool_id=pool_id,
            name=name,
            backend=backend,
            collateral=self.collateral,
            token_si=token_si,
            token_no=token_no,
            vault=vault,
            market=market,
            router=router,
            created_at=utc_now(),
        )
        self._pools[pool_id] = handles
        logger.info(
            "Pool created: id=%s name=%s symbols=%s/%s backend=%s",
            pool_id,
            name,
            symbol_si,
            symbol_no,
            backend.value,
        )
        return handles

    def get_pool(self, pool_id: str) -> PoolHandles:
        handles = self._pools.get(pool_id)
        if handles is None:
            raise PoolNotFoundError(pool_id)
        return handles

    def list_pools(self) -> list[PoolHandles]:
        return list(self._pools.values())

    def faucet(self, account: str, amount: int) -> int:
        """Mint mock collateral to ``account``. Returns the new balance."""
        validate_amount(amount)
        self.collateral.mint(FAUCET_ACCOUNT, account, amount)
        logger.info("Faucet: %s +%d %s", account, amount, self.collateral.symbol)
        return self.collateral.balance_of(account)

    def balances(self, pool_id: str, account: str) -> AccountBalances:
        p = self.get_pool(pool_id)
        return AccountBalances(
            account=account,
            pool_id=pool_id,
            collateral=p.collateral.balance_of(account),
            si=p.token_si.balance_of(account),
            no=p.token_no.balance_of(account),
            lp_shares=p.market.lp_token.balance_of(account),
        )
