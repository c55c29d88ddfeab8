"""Global enums shared by the vault, market, router and API layers."""

from enum import Enum


class Side(str, Enum):
    """Claim token side. SI pays ``scale``, NO pays ``1 - scale``."""
    SI = "SI"
    NO = "NO"

    @property
    def opposite(self) -> "Side":
        return Side.NO if self is Side.SI else Side.SI


class PoolStatus(str, Enum):
    CREATED = "CREATED"
    ACTIVE = "ACTIVE"
    RESOLVED = "RESOLVED"


class MarketBackendKind(str, Enum):
    """NATIVE = OutcomePairMarket; PAIR = generic exchange pair behind an adapter."""
    NATIVE = "NATIVE"
    PAIR = "PAIR"
