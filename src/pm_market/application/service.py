"""MarketApplicationService: per-market request serialisation.

Each market processes one mutating request at a time (one asyncio.Lock per
market address). Markets never wait on each other. Transfers returned by
the domain are posted to the value ledger while the lock is held, so an
observer never sees a trade without its ledger entries.
"""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable
from typing import TypeVar

from src.pm_clearing.domain.invariants import verify_invariants_after_trade
from src.pm_clearing.domain.models import Transfer
from src.pm_clearing.infrastructure.ledger import ValueLedger
from src.pm_common.datetime_utils import Clock, epoch_now
from src.pm_common.enums import LedgerEntryType, Side, TradeDirection
from src.pm_common.errors import AppError
from src.pm_market.application.schemas import (
    BalanceResponse,
    ClaimResponse,
    MarketStateResponse,
    PriceResponse,
    ResolutionResponse,
    TradeResponse,
)
from src.pm_market.domain.market import BinaryMarket
from src.pm_market.domain.models import ClaimResult, ResolutionResult, TradeResult
from src.pm_registry.domain.registry import MarketRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MarketApplicationService:
    def __init__(
        self,
        registry: MarketRegistry,
        ledger: ValueLedger,
        clock: Clock = epoch_now,
    ) -> None:
        self._registry = registry
        self._ledger = ledger
        self._clock = clock
        self._market_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _get_or_create_lock(self, address: str) -> asyncio.Lock:
        return self._market_locks[address]

    def _market(self, market_id: int) -> BinaryMarket:
        return self._registry.get_market_by_id(market_id)

    async def _run(
        self, market: BinaryMarket, action: str, sender: str, op: Callable[[], T]
    ) -> T:
        """Run ``op`` under the market lock; log and re-raise rejections."""
        async with self._get_or_create_lock(market.address):
            try:
                return op()
            except AppError as exc:
                logger.warning(
                    "%s rejected: market=%d sender=%s code=%d %s",
                    action, market.market_id, sender, exc.code, exc.message,
                )
                raise

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def trade(
        self, market_id: int, direction: TradeDirection, side: Side, sender: str, amount: int
    ) -> TradeResponse:
        market = self._market(market_id)

        def op() -> TradeResult:
            k_before = market.invariant_k()
            now = self._clock()
            # Ledger is posted only after the market-wide checks pass
            if direction is TradeDirection.BUY:
                result = market.buy(side, sender, amount, now)
            else:
                result = market.sell(side, sender, amount, now)
            verify_invariants_after_trade(market, k_before)

            if direction is TradeDirection.BUY:
                deposit = Transfer(sender=sender, recipient=market.address, amount=amount)
                self._ledger.record(deposit, LedgerEntryType.TRADE_DEPOSIT, market.address)
            else:
                self._ledger.apply(result.transfers, LedgerEntryType.SELL_PAYOUT, market.address)
            return result

        result = await self._run(market, f"{direction.value} {side.value}", sender, op)
        logger.info(
            "%s %s: market=%d trader=%s in=%d out=%d fee=%d reserves=(%d, %d)",
            direction.value, side.value, market_id, sender, result.amount_in,
            result.amount_out, result.fee, result.reserve_yes, result.reserve_no,
        )
        return TradeResponse.from_domain(result)

    async def buy(self, market_id: int, side: Side, sender: str, amount: int) -> TradeResponse:
        return await self.trade(market_id, TradeDirection.BUY, side, sender, amount)

    async def sell(self, market_id: int, side: Side, sender: str, amount: int) -> TradeResponse:
        return await self.trade(market_id, TradeDirection.SELL, side, sender, amount)

    async def resolve(self, market_id: int, sender: str, outcome: bool) -> ResolutionResponse:
        market = self._market(market_id)

        def op() -> ResolutionResult:
            result = market.resolve(sender, outcome)
            self._ledger.apply(
                result.transfers, LedgerEntryType.SETTLEMENT_PAYOUT, market.address
            )
            return result

        result = await self._run(market, "RESOLVE", sender, op)
        return ResolutionResponse.from_domain(result)

    async def claim(self, market_id: int, sender: str) -> ClaimResponse:
        market = self._market(market_id)

        def op() -> ClaimResult:
            result = market.claim(sender)
            self._ledger.apply(result.transfers, LedgerEntryType.CLAIM_PAYOUT, market.address)
            return result

        result = await self._run(market, "CLAIM", sender, op)
        logger.info(
            "Claim: market=%d holder=%s shares=%d amount=%d",
            market_id, sender, result.winning_shares, result.amount,
        )
        return ClaimResponse.from_domain(result)

    # ------------------------------------------------------------------
    # Queries (read-only, no lock)
    # ------------------------------------------------------------------

    def get_market_state(self, market_id: int) -> MarketStateResponse:
        return MarketStateResponse.from_domain(self._market(market_id).snapshot(self._clock()))

    def get_price(self, market_id: int) -> PriceResponse:
        market = self._market(market_id)
        reserve_yes, reserve_no = market.reserves()
        return PriceResponse(
            market_id=market_id,
            price_yes=market.price_yes(),
            price_no=market.price_no(),
            reserve_yes=reserve_yes,
            reserve_no=reserve_no,
        )

    def get_user_balances(self, market_id: int, holder: str) -> BalanceResponse:
        balance = self._market(market_id).balance_of(holder)
        return BalanceResponse.from_domain(market_id, holder, balance)
