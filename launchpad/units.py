"""Base-unit conversion helpers for SPL token and SOL amounts."""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_EVEN
from typing import Union

# Largest value an on-chain u64 amount can hold
U64_MAX = 2**64 - 1

SOL_DECIMALS = 9
LAMPORTS_PER_SOL = 10**SOL_DECIMALS

Number = Union[int, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without passing through binary floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def fits_u64(value: int) -> bool:
    return 0 <= value <= U64_MAX


def to_base_units(amount: Number, decimals: int) -> int:
    """
    Convert a display amount (e.g. 1.5 tokens) to integer base units.

    Fractional base units are truncated, matching how a wallet would
    refuse to send a fraction of the smallest unit.
    """
    scaled = to_decimal(amount) * (Decimal(10) ** decimals)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def from_base_units(amount: int, decimals: int) -> Decimal:
    """Convert integer base units to a display Decimal."""
    return Decimal(amount).scaleb(-decimals)


def lamports_to_sol(lamports: int) -> Decimal:
    return from_base_units(lamports, SOL_DECIMALS)


def quantize(value: Decimal, places: int) -> Decimal:
    """Round to ``places`` fractional digits using banker's rounding."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN)
