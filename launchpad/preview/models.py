"""Data models for the launch preview."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple
import json

from launchpad.fees.models import FeeEstimate
from launchpad.mint.models import AuthorityFlags, TokenConfig
from launchpad.pool.models import PoolState, SwapQuote


class RiskIndicator(str, Enum):
    """Display hints a holder would check before buying the token."""

    MINT_AUTHORITY_RETAINED = "mint_authority_retained"      # Supply can be inflated
    FREEZE_AUTHORITY_RETAINED = "freeze_authority_retained"  # Holders can be frozen
    UPDATE_AUTHORITY_RETAINED = "update_authority_retained"  # Metadata can change
    NO_LIQUIDITY_POOL = "no_liquidity_pool"                  # Nothing to trade against


@dataclass(frozen=True)
class Preview:
    """Read-only before/after view of a simulated launch."""

    config: TokenConfig
    authority: AuthorityFlags
    fee: FeeEstimate
    pool: Optional[PoolState] = None
    swap: Optional[SwapQuote] = None
    metadata: Mapping = field(default_factory=dict)
    indicators: Tuple[RiskIndicator, ...] = ()
    network: Optional[str] = None

    @property
    def pool_after(self) -> Optional[PoolState]:
        """Pool state once the previewed swap is applied, if any."""
        if self.swap is not None:
            return self.swap.pool_after
        return self.pool

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for the presentation layer."""
        return {
            "network": self.network,
            "token": self.config.to_dict(),
            "authority": self.authority.to_dict(),
            "fee": self.fee.to_dict(),
            "pool": self.pool.to_dict() if self.pool else None,
            "swap": self.swap.to_dict() if self.swap else None,
            "metadata": dict(self.metadata),
            "indicators": [i.value for i in self.indicators],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
