"""Integer arithmetic utilities for nano-denominated values.

All amounts, reserves and balances use int (nano units, 1 unit = 10^9 nano).
No float, no Decimal.
"""

NANO_PER_UNIT = 1_000_000_000
BPS_DENOMINATOR = 10_000
PROBABILITY_DENOMINATOR = 100


def to_nano(units: int | str) -> int:
    """Convert a unit amount to nano: to_nano(5) -> 5_000_000_000, to_nano("0.1") -> 100_000_000.

    Strings are parsed digit by digit so "0.09" is exact.
    """
    text = str(units).strip()
    negative = text.startswith("-")
    if negative:
        text = text[1:]
    whole, _, frac = text.partition(".")
    if len(frac) > 9:
        raise ValueError(f"At most 9 decimal places allowed, got {units!r}")
    if not (whole or frac) or not (whole + frac).isdigit():
        raise ValueError(f"Not a decimal amount: {units!r}")
    nano = int(whole or "0") * NANO_PER_UNIT + int(frac.ljust(9, "0") or "0")
    return -nano if negative else nano


def nano_to_display(nano: int) -> str:
    """Convert nano to display string: 1_500_000_000 -> '1.5', -100_000_000 -> '-0.1'."""
    sign = "-" if nano < 0 else ""
    whole, frac = divmod(abs(nano), NANO_PER_UNIT)
    if frac == 0:
        return f"{sign}{whole:,}"
    return f"{sign}{whole:,}.{frac:09d}".rstrip("0")


def apply_bps_discount(amount: int, fee_bps: int) -> int:
    """Amount net of a bps fee, floored: amount * (10000 - fee_bps) // 10000."""
    return amount * (BPS_DENOMINATOR - fee_bps) // BPS_DENOMINATOR


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling: (a + b - 1) // b for non-negative a and positive b."""
    return (numerator + denominator - 1) // denominator
