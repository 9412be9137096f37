"""Constant-product (x * y = k) math for binary pools.

Pure integer functions, no state. Reserves and amounts are nano units,
prices are basis points of the quote unit.

Fees are charged on the AMM-computed leg and stay inside the pool:
  - swap_in keeps the gross input (fee included) in reserve_in, so k grows
  - swap_out withdraws only the net payout from reserve_out, so k grows

Both legs round the k quotient up, so integer rounding never shrinks k
either, whatever the pool skew.
"""

from dataclasses import dataclass

from src.pm_common.errors import (
    DivisionByZeroError,
    InsufficientLiquidityError,
    InvalidAmountError,
    InvalidFeeError,
    InvalidProbabilityError,
)
from src.pm_common.units import (
    BPS_DENOMINATOR,
    PROBABILITY_DENOMINATOR,
    apply_bps_discount,
    ceil_div,
)


@dataclass(frozen=True)
class SwapResult:
    amount_in: int      # gross amount fed into reserve_in
    amount_out: int     # amount handed to the trader (shares on buy, value on sell)
    fee: int            # part of the trade retained by the pool
    reserve_in: int     # post-trade
    reserve_out: int    # post-trade


def validate_fee_bps(fee_bps: int) -> None:
    """Fee must lie in [0, 10000)."""
    if not (0 <= fee_bps < BPS_DENOMINATOR):
        raise InvalidFeeError(fee_bps)


def split_initial_value(initial_value: int, probability: int) -> tuple[int, int]:
    """Split the seed value into (reserve_yes, reserve_no) by a 1-99 percent probability."""
    if not (0 < probability < PROBABILITY_DENOMINATOR):
        raise InvalidProbabilityError(probability)
    reserve_yes = initial_value * probability // PROBABILITY_DENOMINATOR
    return reserve_yes, initial_value - reserve_yes


def price_of(side_reserve: int, other_reserve: int) -> int:
    """Marginal price of ``side`` in bps: other * 10000 // side."""
    if side_reserve == 0:
        raise DivisionByZeroError("side reserve is zero")
    return other_reserve * BPS_DENOMINATOR // side_reserve


def _check_pool(reserve_in: int, reserve_out: int, amount: int) -> None:
    if amount <= 0:
        raise InvalidAmountError(f"amount must be positive, got {amount}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidityError(
            f"pool is empty (reserve_in={reserve_in}, reserve_out={reserve_out})"
        )


def swap_in(reserve_in: int, reserve_out: int, amount_in: int, fee_bps: int) -> SwapResult:
    """Buy leg: pay ``amount_in`` into reserve_in, receive shares out of reserve_out.

    amount_eff = amount_in * (10000 - fee) // 10000
    amount_out = reserve_out - ceil(reserve_in * reserve_out / (reserve_in + amount_eff))

    The quotient is rounded up so the shares handed out are rounded down.
    """
    _check_pool(reserve_in, reserve_out, amount_in)
    validate_fee_bps(fee_bps)

    amount_eff = apply_bps_discount(amount_in, fee_bps)
    k = reserve_in * reserve_out
    amount_out = reserve_out - ceil_div(k, reserve_in + amount_eff)
    if amount_out >= reserve_out:
        raise InsufficientLiquidityError(
            f"swap of {amount_in} would drain reserve {reserve_out}"
        )
    if amount_out <= 0:
        raise InvalidAmountError(f"swap of {amount_in} yields no shares")

    return SwapResult(
        amount_in=amount_in,
        amount_out=amount_out,
        fee=amount_in - amount_eff,
        reserve_in=reserve_in + amount_in,
        reserve_out=reserve_out - amount_out,
    )


def swap_out(reserve_in: int, reserve_out: int, amount_in: int, fee_bps: int) -> SwapResult:
    """Sell leg: return ``amount_in`` shares into reserve_in, withdraw value from reserve_out.

    gross = reserve_out - ceil(reserve_in * reserve_out / (reserve_in + amount_in))
    payout = gross * (10000 - fee) // 10000

    The quotient is rounded up and the payout down, so rounding never
    shrinks k. The caller checks the seller actually holds ``amount_in``.
    """
    _check_pool(reserve_in, reserve_out, amount_in)
    validate_fee_bps(fee_bps)

    k = reserve_in * reserve_out
    gross = reserve_out - ceil_div(k, reserve_in + amount_in)
    payout = apply_bps_discount(gross, fee_bps)
    if payout >= reserve_out:
        raise InsufficientLiquidityError(
            f"sale of {amount_in} shares would drain reserve {reserve_out}"
        )
    if payout <= 0:
        raise InvalidAmountError(f"sale of {amount_in} shares pays nothing")

    return SwapResult(
        amount_in=amount_in,
        amount_out=payout,
        fee=gross - payout,
        reserve_in=reserve_in + amount_in,
        reserve_out=reserve_out - payout,
    )
