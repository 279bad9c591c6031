"""Preview Composer - aggregates component outputs into one Preview."""

from types import MappingProxyType
from typing import List, Optional
import logging

from launchpad.errors import IncompletePreview
from launchpad.fees.models import FeeEstimate
from launchpad.mint.metadata import build_metadata_document
from launchpad.mint.models import Authority, AuthorityFlags, TokenConfig
from launchpad.pool.models import PoolState, SwapQuote
from .models import Preview, RiskIndicator

logger = logging.getLogger(__name__)

_RETAINED_INDICATORS = {
    Authority.MINT: RiskIndicator.MINT_AUTHORITY_RETAINED,
    Authority.FREEZE: RiskIndicator.FREEZE_AUTHORITY_RETAINED,
    Authority.UPDATE: RiskIndicator.UPDATE_AUTHORITY_RETAINED,
}


class PreviewComposer:
    """
    Builds Preview snapshots. Holds no state and validates nothing itself:
    inputs are assumed to come from the validator, authority machine, fee
    estimator and pool simulator.
    """

    def compose(
        self,
        config: TokenConfig,
        authority: AuthorityFlags,
        fee_estimate: FeeEstimate,
        pool_state: Optional[PoolState] = None,
        swap_quote: Optional[SwapQuote] = None,
        network: Optional[str] = None,
    ) -> Preview:
        """
        Compose a preview.

        When ``swap_quote`` is given without ``pool_state``, the quote's
        ``pool_before`` is used as the "before" pool.

        Raises:
            IncompletePreview: If config, authority or fee_estimate is missing
        """
        missing: List[str] = [
            label
            for label, value in (
                ("config", config),
                ("authority", authority),
                ("fee_estimate", fee_estimate),
            )
            if value is None
        ]
        if missing:
            raise IncompletePreview(missing)

        if pool_state is None and swap_quote is not None:
            pool_state = swap_quote.pool_before

        indicators = [_RETAINED_INDICATORS[a] for a in authority.retained]
        if pool_state is None:
            indicators.append(RiskIndicator.NO_LIQUIDITY_POOL)

        preview = Preview(
            config=config,
            authority=authority,
            fee=fee_estimate,
            pool=pool_state,
            swap=swap_quote,
            metadata=MappingProxyType(build_metadata_document(config)),
            indicators=tuple(indicators),
            network=network,
        )
        logger.debug(f"Composed preview for {config.symbol}: {[i.value for i in indicators]}")
        return preview


_default_composer = PreviewComposer()


def compose(
    config: TokenConfig,
    authority: AuthorityFlags,
    fee_estimate: FeeEstimate,
    pool_state: Optional[PoolState] = None,
    swap_quote: Optional[SwapQuote] = None,
    network: Optional[str] = None,
) -> Preview:
    """Compose a preview with the default composer."""
    return _default_composer.compose(
        config, authority, fee_estimate, pool_state, swap_quote, network
    )
