"""Market settlement: pro-rata payout of the pool to the winning side."""

from collections.abc import Mapping

from src.pm_clearing.domain.models import Transfer
from src.pm_common.enums import Side
from src.pm_market.domain.models import HolderBalance


def winning_side(outcome: bool) -> Side:
    return Side.YES if outcome else Side.NO


def total_winning_shares(balances: Mapping[str, HolderBalance], outcome: bool) -> int:
    side = winning_side(outcome)
    return sum(b.shares(side) for b in balances.values())


def pro_rata(shares: int, total_shares: int, pool: int) -> int:
    """shares / total_shares of pool, floored. Zero when nobody holds the side."""
    if total_shares == 0:
        return 0
    return shares * pool // total_shares


def compute_payouts(
    market_address: str,
    balances: Mapping[str, HolderBalance],
    outcome: bool,
    pool: int,
) -> list[Transfer]:
    """One transfer per holder with winning shares, in holder insertion order.

    Floor division means the sum of payouts never exceeds ``pool``; the
    remainder stays in the market.
    """
    side = winning_side(outcome)
    total = total_winning_shares(balances, outcome)
    transfers: list[Transfer] = []
    for holder, balance in balances.items():
        winning = balance.shares(side)
        if winning == 0:
            continue
        amount = pro_rata(winning, total, pool)
        if amount > 0:
            transfers.append(Transfer(sender=market_address, recipient=holder, amount=amount))
    return transfers
