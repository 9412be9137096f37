"""BinaryMarket: one yes/no market's pool, holder balances and lifecycle.

State machine:
    OPEN ──(now >= close_timestamp)──> CLOSED ──resolve──> RESOLVED
      └────────────────────resolve────────────────────────┘

CLOSED is evaluated from the clock on every trade; RESOLVED is terminal.

Every mutating method validates first and writes last, so a rejected
request leaves the market exactly as it was. Methods return the value
transfers the caller must carry out; the market itself only tracks what
it holds (``vault_balance``).
"""

import logging

from src.pm_amm.domain.cpmm import (
    SwapResult,
    price_of,
    split_initial_value,
    swap_in,
    swap_out,
    validate_fee_bps,
)
from src.pm_clearing.domain.invariants import verify_swap
from src.pm_clearing.domain.models import Transfer
from src.pm_clearing.domain.settlement import (
    compute_payouts,
    pro_rata,
    total_winning_shares,
    winning_side,
)
from src.pm_common.enums import MarketPhase, PayoutMode, Side, TradeDirection
from src.pm_common.errors import (
    AlreadyResolvedError,
    HolderLimitExceededError,
    InsufficientLiquidityError,
    InsufficientSharesError,
    InvalidAmountError,
    MarketClosedError,
    NothingToClaimError,
    NotResolvedError,
    UnauthorizedError,
)
from src.pm_market.domain.models import (
    ClaimResult,
    HolderBalance,
    MarketParams,
    MarketSnapshot,
    ResolutionResult,
    TradeResult,
)

logger = logging.getLogger(__name__)


class BinaryMarket:
    def __init__(
        self,
        market_id: int,
        address: str,
        factory: str,
        params: MarketParams,
        min_liquidity: int,
        payout_mode: PayoutMode = PayoutMode.SYNC,
        max_holders: int = 0,
    ) -> None:
        if params.initial_value < min_liquidity:
            raise InsufficientLiquidityError(
                f"initial value {params.initial_value} below minimum {min_liquidity}"
            )
        reserve_yes, reserve_no = split_initial_value(
            params.initial_value, params.initial_probability
        )
        validate_fee_bps(params.fee_bps)
        if reserve_yes <= 0 or reserve_no <= 0:
            raise InsufficientLiquidityError(
                f"initial value {params.initial_value} too small to seed both reserves"
            )

        self.market_id = market_id
        self.address = address
        self.factory = factory
        self.params = params
        self.payout_mode = payout_mode
        self.max_holders = max_holders

        self.reserve_yes = reserve_yes
        self.reserve_no = reserve_no
        self.holder_balances: dict[str, HolderBalance] = {}

        self.resolved = False
        self.outcome = False
        self.payout_pool = 0
        self.winning_shares_snapshot = 0

        self.vault_balance = params.initial_value
        self.total_paid_in = params.initial_value
        self.total_paid_out = 0

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def question(self) -> str:
        return self.params.question

    @property
    def clarification(self) -> str:
        return self.params.clarification

    @property
    def close_timestamp(self) -> int:
        return self.params.close_timestamp

    @property
    def oracle_addr(self) -> str:
        return self.params.oracle_addr

    @property
    def fee_bps(self) -> int:
        return self.params.fee_bps

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    def buy_yes(self, trader: str, amount: int, now: int) -> TradeResult:
        return self._buy(Side.YES, trader, amount, now)

    def buy_no(self, trader: str, amount: int, now: int) -> TradeResult:
        return self._buy(Side.NO, trader, amount, now)

    def sell_yes(self, trader: str, amount: int, now: int) -> TradeResult:
        return self._sell(Side.YES, trader, amount, now)

    def sell_no(self, trader: str, amount: int, now: int) -> TradeResult:
        return self._sell(Side.NO, trader, amount, now)

    def buy(self, side: Side, trader: str, amount: int, now: int) -> TradeResult:
        return self._buy(side, trader, amount, now)

    def sell(self, side: Side, trader: str, amount: int, now: int) -> TradeResult:
        return self._sell(side, trader, amount, now)

    def _buy(self, side: Side, trader: str, amount: int, now: int) -> TradeResult:
        self._require_open(now)
        if amount <= 0:
            raise InvalidAmountError(f"buy amount must be positive, got {amount}")
        self._require_holder_slot(trader)

        # The value paid grows the opposite reserve; shares come out of this side.
        swap = swap_in(self._reserve(side.opposite), self._reserve(side), amount, self.fee_bps)
        verify_swap(self.market_id, self._reserve(side.opposite), self._reserve(side), swap)

        balance = self.holder_balances.setdefault(trader, HolderBalance())
        self._credit(balance, side, swap.amount_out)
        self._set_reserves(side, swap)
        self.vault_balance += amount
        self.total_paid_in += amount

        logger.debug(
            "Buy %s: market=%d trader=%s paid=%d shares=%d fee=%d",
            side.value, self.market_id, trader, amount, swap.amount_out, swap.fee,
        )
        return self._trade_result(trader, side, TradeDirection.BUY, swap, [])

    def _sell(self, side: Side, trader: str, amount: int, now: int) -> TradeResult:
        self._require_open(now)
        if amount <= 0:
            raise InvalidAmountError(f"sell amount must be positive, got {amount}")
        held = self.balance_of(trader).shares(side)
        if held < amount:
            raise InsufficientSharesError(side.value, amount, held)

        # Shares return to this side; the payout leaves the opposite reserve.
        swap = swap_out(self._reserve(side), self._reserve(side.opposite), amount, self.fee_bps)
        verify_swap(self.market_id, self._reserve(side), self._reserve(side.opposite), swap)
        if swap.amount_out > self.vault_balance:
            raise InsufficientLiquidityError(
                f"payout {swap.amount_out} exceeds market balance {self.vault_balance}"
            )

        balance = self.holder_balances[trader]
        self._credit(balance, side, -amount)
        if side is Side.YES:
            self.reserve_yes, self.reserve_no = swap.reserve_in, swap.reserve_out
        else:
            self.reserve_no, self.reserve_yes = swap.reserve_in, swap.reserve_out
        self.vault_balance -= swap.amount_out
        self.total_paid_out += swap.amount_out

        logger.debug(
            "Sell %s: market=%d trader=%s shares=%d payout=%d fee=%d",
            side.value, self.market_id, trader, amount, swap.amount_out, swap.fee,
        )
        transfer = Transfer(sender=self.address, recipient=trader, amount=swap.amount_out)
        return self._trade_result(trader, side, TradeDirection.SELL, swap, [transfer])

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, caller: str, outcome: bool) -> ResolutionResult:
        """Oracle-only. Resolution does not wait for close_timestamp."""
        if self.resolved:
            raise AlreadyResolvedError(self.market_id)
        if caller != self.oracle_addr:
            raise UnauthorizedError(caller)

        pool = min(self.reserve_yes + self.reserve_no, self.vault_balance)
        winning_total = total_winning_shares(self.holder_balances, outcome)
        transfers: list[Transfer] = []
        if self.payout_mode is PayoutMode.SYNC:
            transfers = compute_payouts(self.address, self.holder_balances, outcome, pool)

        self.resolved = True
        self.outcome = outcome
        self.payout_pool = pool
        self.winning_shares_snapshot = winning_total
        if self.payout_mode is PayoutMode.SYNC:
            paid = sum(t.amount for t in transfers)
            self.vault_balance -= paid
            self.total_paid_out += paid
            for balance in self.holder_balances.values():
                balance.yes = balance.no = 0

        logger.info(
            "Market %d resolved %s: pool=%d winning_shares=%d mode=%s payouts=%d",
            self.market_id, winning_side(outcome).value, pool, winning_total,
            self.payout_mode.value, len(transfers),
        )
        return ResolutionResult(
            market_id=self.market_id,
            outcome=outcome,
            payout_mode=self.payout_mode,
            payout_pool=pool,
            total_winning_shares=winning_total,
            transfers=transfers,
        )

    def claim(self, holder: str) -> ClaimResult:
        """Withdraw a holder's pro-rata share after resolution (CLAIM mode)."""
        if not self.resolved:
            raise NotResolvedError(self.market_id)
        balance = self.holder_balances.get(holder)
        if balance is None or balance.is_empty:
            raise NothingToClaimError(holder)

        winning = balance.shares(winning_side(self.outcome))
        amount = min(
            pro_rata(winning, self.winning_shares_snapshot, self.payout_pool),
            self.vault_balance,
        )

        balance.yes = balance.no = 0
        transfers: list[Transfer] = []
        if amount > 0:
            self.vault_balance -= amount
            self.total_paid_out += amount
            transfers.append(Transfer(sender=self.address, recipient=holder, amount=amount))
        return ClaimResult(
            market_id=self.market_id,
            holder=holder,
            winning_shares=winning,
            amount=amount,
            transfers=transfers,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def phase(self, now: int) -> MarketPhase:
        if self.resolved:
            return MarketPhase.RESOLVED
        if now >= self.close_timestamp:
            return MarketPhase.CLOSED
        return MarketPhase.OPEN

    def reserves(self) -> tuple[int, int]:
        return self.reserve_yes, self.reserve_no

    def price_yes(self) -> int:
        return price_of(self.reserve_yes, self.reserve_no)

    def price_no(self) -> int:
        return price_of(self.reserve_no, self.reserve_yes)

    def invariant_k(self) -> int:
        return self.reserve_yes * self.reserve_no

    def balance_of(self, holder: str) -> HolderBalance:
        """Copy of the holder's balance; unknown holders read as zero."""
        balance = self.holder_balances.get(holder)
        if balance is None:
            return HolderBalance()
        return HolderBalance(yes=balance.yes, no=balance.no)

    def snapshot(self, now: int) -> MarketSnapshot:
        return MarketSnapshot(
            market_id=self.market_id,
            address=self.address,
            factory=self.factory,
            question=self.question,
            clarification=self.clarification,
            close_timestamp=self.close_timestamp,
            oracle_addr=self.oracle_addr,
            fee_bps=self.fee_bps,
            payout_mode=self.payout_mode,
            phase=self.phase(now),
            reserve_yes=self.reserve_yes,
            reserve_no=self.reserve_no,
            price_yes=self.price_yes(),
            price_no=self.price_no(),
            resolved=self.resolved,
            outcome=self.outcome if self.resolved else None,
            vault_balance=self.vault_balance,
            total_paid_in=self.total_paid_in,
            total_paid_out=self.total_paid_out,
            holder_count=len(self.holder_balances),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_open(self, now: int) -> None:
        if self.resolved:
            raise AlreadyResolvedError(self.market_id)
        if now >= self.close_timestamp:
            raise MarketClosedError(self.market_id)

    def _require_holder_slot(self, trader: str) -> None:
        if (
            self.max_holders
            and trader not in self.holder_balances
            and len(self.holder_balances) >= self.max_holders
        ):
            raise HolderLimitExceededError(self.max_holders)

    def _reserve(self, side: Side) -> int:
        return self.reserve_yes if side is Side.YES else self.reserve_no

    def _set_reserves(self, bought: Side, swap: SwapResult) -> None:
        # Buy: reserve_in is the opposite side, reserve_out the side bought.
        if bought is Side.YES:
            self.reserve_no, self.reserve_yes = swap.reserve_in, swap.reserve_out
        else:
            self.reserve_yes, self.reserve_no = swap.reserve_in, swap.reserve_out

    @staticmethod
    def _credit(balance: HolderBalance, side: Side, shares: int) -> None:
        if side is Side.YES:
            balance.yes += shares
        else:
            balance.no += shares

    def _trade_result(
        self,
        trader: str,
        side: Side,
        direction: TradeDirection,
        swap: SwapResult,
        transfers: list[Transfer],
    ) -> TradeResult:
        return TradeResult(
            market_id=self.market_id,
            trader=trader,
            side=side,
            direction=direction,
            amount_in=swap.amount_in,
            amount_out=swap.amount_out,
            fee=swap.fee,
            reserve_yes=self.reserve_yes,
            reserve_no=self.reserve_no,
            balance=self.balance_of(trader),
            transfers=transfers,
        )
