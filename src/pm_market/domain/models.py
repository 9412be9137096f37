"""Domain models for pm_market: pure dataclasses, no business logic."""

from dataclasses import dataclass, field

from src.pm_clearing.domain.models import Transfer
from src.pm_common.enums import MarketPhase, PayoutMode, Side, TradeDirection


@dataclass(frozen=True)
class MarketParams:
    """Immutable creation parameters, as submitted to the registry."""

    question: str
    clarification: str
    close_timestamp: int      # epoch seconds; trading allowed while now < close
    oracle_addr: str
    fee_bps: int
    initial_value: int        # nano
    initial_probability: int  # 1-99 percent


@dataclass
class HolderBalance:
    yes: int = 0
    no: int = 0

    def shares(self, side: Side) -> int:
        return self.yes if side is Side.YES else self.no

    @property
    def is_empty(self) -> bool:
        return self.yes == 0 and self.no == 0


@dataclass(frozen=True)
class TradeResult:
    market_id: int
    trader: str
    side: Side
    direction: TradeDirection
    amount_in: int            # value paid (buy) or shares returned (sell)
    amount_out: int           # shares received (buy) or value paid out (sell)
    fee: int
    reserve_yes: int          # post-trade
    reserve_no: int           # post-trade
    balance: HolderBalance    # trader's balance after the trade
    transfers: list[Transfer] = field(default_factory=list)


@dataclass(frozen=True)
class ResolutionResult:
    market_id: int
    outcome: bool
    payout_mode: PayoutMode
    payout_pool: int
    total_winning_shares: int
    transfers: list[Transfer] = field(default_factory=list)

    @property
    def total_paid(self) -> int:
        return sum(t.amount for t in self.transfers)


@dataclass(frozen=True)
class ClaimResult:
    market_id: int
    holder: str
    winning_shares: int
    amount: int
    transfers: list[Transfer] = field(default_factory=list)


@dataclass(frozen=True)
class MarketSnapshot:
    """Read-only view of one market: metadata plus current pool state."""

    market_id: int
    address: str
    factory: str
    question: str
    clarification: str
    close_timestamp: int
    oracle_addr: str
    fee_bps: int
    payout_mode: PayoutMode
    phase: MarketPhase
    reserve_yes: int
    reserve_no: int
    price_yes: int
    price_no: int
    resolved: bool
    outcome: bool | None
    vault_balance: int
    total_paid_in: int
    total_paid_out: int
    holder_count: int
