"""Liquidity Pool Module - constant-product AMM preview."""

from .models import (
    PoolConfig,
    PoolState,
    SwapDirection,
    SwapQuote,
    DepositResult,
    WithdrawResult,
)
from .simulator import LiquidityPoolSimulator

__all__ = [
    "PoolConfig",
    "PoolState",
    "SwapDirection",
    "SwapQuote",
    "DepositResult",
    "WithdrawResult",
    "LiquidityPoolSimulator",
]
