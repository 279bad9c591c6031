"""Solana token launch simulator.

Validates a proposed SPL token configuration, tracks its irreversible
authorities, estimates launch fees and previews a constant-product liquidity
pool. Everything runs locally; nothing is signed or sent.
"""

from .mint import Authority, AuthorityFlags, AuthorityStateMachine, ConfigValidator, TokenConfig
from .fees import FeeEstimate, FeeEstimator
from .pool import LiquidityPoolSimulator, PoolState, SwapDirection, SwapQuote
from .preview import Preview, PreviewComposer
from .session import SimulationSession

__all__ = [
    "Authority",
    "AuthorityFlags",
    "AuthorityStateMachine",
    "ConfigValidator",
    "TokenConfig",
    "FeeEstimate",
    "FeeEstimator",
    "LiquidityPoolSimulator",
    "PoolState",
    "SwapDirection",
    "SwapQuote",
    "Preview",
    "PreviewComposer",
    "SimulationSession",
]
