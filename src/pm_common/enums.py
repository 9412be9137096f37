"""Global enums shared by the market, registry and clearing modules."""

from enum import Enum


class MarketPhase(str, Enum):
    """Lifecycle phase. CLOSED is derived from the clock, never stored."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    RESOLVED = "RESOLVED"


class Side(str, Enum):
    YES = "YES"
    NO = "NO"

    @property
    def opposite(self) -> "Side":
        return Side.NO if self is Side.YES else Side.YES


class TradeDirection(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class PayoutMode(str, Enum):
    """SYNC: Resolve pays every winner. CLAIM: each holder withdraws separately."""
    SYNC = "SYNC"
    CLAIM = "CLAIM"


class LedgerEntryType(str, Enum):
    # Registry / market funding
    FACTORY_DEPOSIT = "FACTORY_DEPOSIT"
    MARKET_DEPOSIT = "MARKET_DEPOSIT"
    # Trading
    TRADE_DEPOSIT = "TRADE_DEPOSIT"
    SELL_PAYOUT = "SELL_PAYOUT"
    # Resolution
    SETTLEMENT_PAYOUT = "SETTLEMENT_PAYOUT"
    CLAIM_PAYOUT = "CLAIM_PAYOUT"
