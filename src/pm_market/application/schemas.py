"""Pydantic schemas for pm_market API requests and responses.

Amounts are integers in nano (1 unit = 10^9 nano). Prices are basis points
of the quote unit: price_yes = reserve_no * 10000 // reserve_yes.
"""

from typing import Literal

from pydantic import BaseModel, Field

from src.pm_common.datetime_utils import epoch_to_iso
from src.pm_common.units import nano_to_display
from src.pm_market.domain.models import (
    ClaimResult,
    HolderBalance,
    MarketSnapshot,
    ResolutionResult,
    TradeResult,
)

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TradeRequest(BaseModel):
    sender: str = Field(min_length=1)
    side: Literal["YES", "NO"]
    # Zero is let through so the domain reports InvalidAmount (4001)
    amount: int = Field(ge=0, description="Buy: value in nano. Sell: shares.")


class ResolveRequest(BaseModel):
    sender: str = Field(min_length=1)
    outcome: bool


class ClaimRequest(BaseModel):
    sender: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class TransferOut(BaseModel):
    recipient: str
    amount: int


class BalanceResponse(BaseModel):
    market_id: int
    holder: str
    yes: int
    no: int

    @classmethod
    def from_domain(cls, market_id: int, holder: str, balance: HolderBalance) -> "BalanceResponse":
        return cls(market_id=market_id, holder=holder, yes=balance.yes, no=balance.no)


class TradeResponse(BaseModel):
    market_id: int
    trader: str
    side: str
    direction: str
    amount_in: int
    amount_out: int
    fee: int
    reserve_yes: int
    reserve_no: int
    yes_shares: int
    no_shares: int
    transfers: list[TransferOut]

    @classmethod
    def from_domain(cls, result: TradeResult) -> "TradeResponse":
        return cls(
            market_id=result.market_id,
            trader=result.trader,
            side=result.side.value,
            direction=result.direction.value,
            amount_in=result.amount_in,
            amount_out=result.amount_out,
            fee=result.fee,
            reserve_yes=result.reserve_yes,
            reserve_no=result.reserve_no,
            yes_shares=result.balance.yes,
            no_shares=result.balance.no,
            transfers=[TransferOut(recipient=t.recipient, amount=t.amount) for t in result.transfers],
        )


class ResolutionResponse(BaseModel):
    market_id: int
    outcome: bool
    payout_mode: str
    payout_pool: int
    total_winning_shares: int
    total_paid: int
    payouts: list[TransferOut]

    @classmethod
    def from_domain(cls, result: ResolutionResult) -> "ResolutionResponse":
        return cls(
            market_id=result.market_id,
            outcome=result.outcome,
            payout_mode=result.payout_mode.value,
            payout_pool=result.payout_pool,
            total_winning_shares=result.total_winning_shares,
            total_paid=result.total_paid,
            payouts=[TransferOut(recipient=t.recipient, amount=t.amount) for t in result.transfers],
        )


class ClaimResponse(BaseModel):
    market_id: int
    holder: str
    winning_shares: int
    amount: int

    @classmethod
    def from_domain(cls, result: ClaimResult) -> "ClaimResponse":
        return cls(
            market_id=result.market_id,
            holder=result.holder,
            winning_shares=result.winning_shares,
            amount=result.amount,
        )


class PriceResponse(BaseModel):
    market_id: int
    price_yes: int
    price_no: int
    reserve_yes: int
    reserve_no: int


class MarketStateResponse(BaseModel):
    market_id: int
    address: str
    factory: str
    question: str
    clarification: str
    close_timestamp: int
    close_time: str
    oracle_addr: str
    fee_bps: int
    payout_mode: str
    phase: str
    reserve_yes: int
    reserve_no: int
    price_yes: int
    price_no: int
    resolved: bool
    outcome: bool | None
    vault_balance: int
    vault_balance_display: str
    total_paid_in: int
    total_paid_out: int
    holder_count: int

    @classmethod
    def from_domain(cls, snap: MarketSnapshot) -> "MarketStateResponse":
        return cls(
            market_id=snap.market_id,
            address=snap.address,
            factory=snap.factory,
            question=snap.question,
            clarification=snap.clarification,
            close_timestamp=snap.close_timestamp,
            close_time=epoch_to_iso(snap.close_timestamp),
            oracle_addr=snap.oracle_addr,
            fee_bps=snap.fee_bps,
            payout_mode=snap.payout_mode.value,
            phase=snap.phase.value,
            reserve_yes=snap.reserve_yes,
            reserve_no=snap.reserve_no,
            price_yes=snap.price_yes,
            price_no=snap.price_no,
            resolved=snap.resolved,
            outcome=snap.outcome,
            vault_balance=snap.vault_balance,
            vault_balance_display=nano_to_display(snap.vault_balance),
            total_paid_in=snap.total_paid_in,
            total_paid_out=snap.total_paid_out,
            holder_count=snap.holder_count,
        )
