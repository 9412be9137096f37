"""Market invariant verification.

INV-1: reserve_yes > 0 and reserve_no > 0
INV-2: reserve_yes * reserve_no never decreases across a trade
INV-3: total_paid_in - total_paid_out == vault_balance >= 0

``verify_swap`` runs inside the market before a swap is applied, so a
violating trade is rejected with nothing written. The post-trade checks
assert the same properties on the market as a whole.
"""

import logging
from typing import TYPE_CHECKING

from src.pm_amm.domain.cpmm import SwapResult
from src.pm_common.errors import InternalError

if TYPE_CHECKING:
    from src.pm_market.domain.market import BinaryMarket

logger = logging.getLogger(__name__)


def verify_swap(market_id: int, reserve_in: int, reserve_out: int, swap: SwapResult) -> None:
    """Reject a computed swap whose post-trade pool breaks INV-1 or INV-2."""
    if swap.reserve_in <= 0 or swap.reserve_out <= 0:
        logger.error(
            "INV-1 violated: market=%d reserves would become (%d, %d)",
            market_id, swap.reserve_in, swap.reserve_out,
        )
        raise InternalError(f"INV-1 violated: market={market_id} pool would empty")
    k_before = reserve_in * reserve_out
    k_after = swap.reserve_in * swap.reserve_out
    if k_after < k_before:
        logger.error("INV-2 violated: market=%d k %d -> %d", market_id, k_before, k_after)
        raise InternalError(f"INV-2 violated: market={market_id} k would decrease")


def verify_invariants_after_trade(market: "BinaryMarket", k_before: int) -> None:
    """Verify critical market invariants. Raises AssertionError if violated."""
    yes, no = market.reserves()
    assert yes > 0 and no > 0, (
        f"INV-1 violated: market={market.market_id} reserve_yes={yes} reserve_no={no}"
    )
    k_after = yes * no
    assert k_after >= k_before, (
        f"INV-2 violated: market={market.market_id} k {k_before} -> {k_after}"
    )
    verify_value_conservation(market)

    logger.debug("Invariants OK: market=%d, k=%d", market.market_id, k_after)


def verify_value_conservation(market: "BinaryMarket") -> None:
    vault = market.vault_balance
    paid_in = market.total_paid_in
    paid_out = market.total_paid_out
    assert vault >= 0, f"INV-3 violated: market={market.market_id} vault={vault} < 0"
    assert paid_in - paid_out == vault, (
        f"INV-3 violated: market={market.market_id} paid_in({paid_in}) - "
        f"paid_out({paid_out}) != vault({vault})"
    )
