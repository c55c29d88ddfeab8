from pydantic_settings import BaseSettings, SettingsConfigDict

from src.pm_common.enums import MarketBackendKind


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Collateral asset shared by every pool in this process
    COLLATERAL_NAME: str = "Mock USD Coin"
    COLLATERAL_SYMBOL: str = "USDC"

    # Backend used by POST /pools when the request does not name one
    DEFAULT_MARKET_BACKEND: MarketBackendKind = MarketBackendKind.NATIVE

    # Mock collateral faucet; disable outside of local and test deployments
    FAUCET_ENABLED: bool = True
    FAUCET_MAX_AMOUNT: int = 100_000 * 10**18

    # App
    APP_NAME: str = "Outcome Pair Markets"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev


settings = Settings()
