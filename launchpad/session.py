"""Simulation Session - one user's token configuration and pool preview."""

from typing import Any, List, Mapping, Optional
import logging

from launchpad.config.settings import NetworkProfile, SimulatorSettings
from launchpad.errors import PoolError, SimulatorError, ValidationError
from launchpad.fees.estimator import FeeEstimator
from launchpad.fees.models import LaunchCostPlan
from launchpad.mint.actions import METADATA_FIELDS, mint_to, update_metadata
from launchpad.mint.authority import AuthorityStateMachine
from launchpad.mint.models import Authority, AuthorityFlags, TokenConfig
from launchpad.mint.validator import ConfigValidator
from launchpad.pool.models import DepositResult, PoolState, SwapDirection, SwapQuote, WithdrawResult
from launchpad.pool.simulator import LiquidityPoolSimulator
from launchpad.preview.composer import PreviewComposer
from launchpad.preview.models import Preview

logger = logging.getLogger(__name__)

# Config fields only the mint authority may change
SUPPLY_FIELDS = ("supply", "decimals")


class SimulationSession:
    """
    Owns every snapshot of a single interactive simulation.

    Each operation delegates to a component and adopts the returned snapshot
    only if the component succeeded; on error the exception propagates and
    the session is exactly as it was. Sessions never share state, so two
    configurations can be previewed side by side with two sessions.

    Flow:
        configure -> revoke / mint / update metadata -> seed pool
        -> deposit / withdraw / swap (undo, reset) -> preview

    Usage:
        session = SimulationSession()
        session.configure({"name": "Moon", "symbol": "MOON", "supply": 1_000_000})
        session.revoke(Authority.MINT)
        session.seed_pool(token_amount=500_000, quote_amount=10)
        session.swap(1_000_000_000, SwapDirection.B_TO_A)
        preview = session.preview()
    """

    def __init__(self, settings: SimulatorSettings = None):
        self.settings = settings or SimulatorSettings()
        self.network: NetworkProfile = self.settings.network_profile

        self.validator = ConfigValidator()
        self.fees = FeeEstimator(self.settings.fee_config())
        self.pools = LiquidityPoolSimulator(self.settings.pool_config())
        self.composer = PreviewComposer()

        self.authority = AuthorityStateMachine()
        self._config: Optional[TokenConfig] = None
        self._pool_history: List[PoolState] = []
        self._last_quote: Optional[SwapQuote] = None

    # ------------------------------------------------------------------
    # Token configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> Optional[TokenConfig]:
        return self._config

    def _require_config(self) -> TokenConfig:
        if self._config is None:
            raise SimulatorError("No token configured; call configure() first")
        return self._config

    def configure(self, raw_input: Mapping[str, Any]) -> TokenConfig:
        """
        Validate and adopt a token configuration.

        Reconfiguring drafts the token again: any seeded pool is discarded
        because its reserves were sized for the old supply and decimals.
        Authorities carry over, so a revoked mint authority still freezes
        supply and decimals and a revoked update authority still freezes
        the metadata fields.

        Raises:
            ValidationError: If the input breaks a constraint
            AuthorityRevoked: If the change needs a revoked authority
        """
        try:
            config = self.validator.validate(raw_input)
        except ValidationError as e:
            logger.warning(f"Rejected token config: {', '.join(e.fields)}")
            raise

        if self._config is not None:
            old, new = self._config.to_dict(), config.to_dict()
            if any(old[f] != new[f] for f in SUPPLY_FIELDS):
                self.authority.require(Authority.MINT)
            if any(old[f] != new[f] for f in METADATA_FIELDS):
                self.authority.require(Authority.UPDATE)

        self._config = config
        self._pool_history = []
        self._last_quote = None
        logger.info(f"Configured {self._config.symbol} on {self.network.name}")
        return self._config

    def revoke(self, authority: Authority) -> AuthorityFlags:
        return self.authority.revoke(authority)

    def restore(self, authority: Authority) -> AuthorityFlags:
        return self.authority.restore(authority)

    def mint(self, amount: int) -> TokenConfig:
        """Simulate minting more supply to the creator."""
        self._config = mint_to(self._require_config(), self.authority, amount)
        return self._config

    def update_metadata(self, **changes) -> TokenConfig:
        """Simulate a metadata rewrite by the update authority."""
        self._config = update_metadata(
            self._require_config(), self.authority, self.validator, **changes
        )
        return self._config

    # ------------------------------------------------------------------
    # Pool
    # ------------------------------------------------------------------

    @property
    def pool(self) -> Optional[PoolState]:
        return self._pool_history[-1] if self._pool_history else None

    def _require_pool(self) -> PoolState:
        if not self._pool_history:
            raise PoolError("No pool seeded; call seed_pool() first")
        return self._pool_history[-1]

    def _adopt(self, pool: PoolState) -> PoolState:
        self._pool_history.append(pool)
        return pool

    def seed_pool(self, token_amount, quote_amount) -> PoolState:
        """Seed a fresh pool, discarding any previous one."""
        pool = self.pools.seed_from_config(self._require_config(), token_amount, quote_amount)
        self._pool_history = [pool]
        self._last_quote = None
        return pool

    def quote(self, amount_in: int, direction: SwapDirection, fee_bps: int = None) -> SwapQuote:
        """Quote a swap without adopting the result."""
        return self.pools.quote_swap(self._require_pool(), amount_in, direction, fee_bps)

    def swap(self, amount_in: int, direction: SwapDirection, fee_bps: int = None) -> SwapQuote:
        """Quote a swap and adopt the resulting pool state."""
        quote = self.quote(amount_in, direction, fee_bps)
        self._adopt(quote.pool_after)
        self._last_quote = quote
        return quote

    def deposit(self, amount_a: int, amount_b: int) -> DepositResult:
        result = self.pools.deposit(self._require_pool(), amount_a, amount_b)
        self._adopt(result.pool)
        self._last_quote = None
        return result

    def withdraw(self, share_fraction) -> WithdrawResult:
        result = self.pools.withdraw(self._require_pool(), share_fraction)
        self._adopt(result.pool)
        self._last_quote = None
        return result

    def undo_pool(self) -> Optional[PoolState]:
        """Step back to the previous pool snapshot. The seed state is kept."""
        if len(self._pool_history) > 1:
            self._pool_history.pop()
            logger.debug(f"Pool undo, {len(self._pool_history)} snapshots left")
        self._last_quote = None
        return self.pool

    def reset_pool(self) -> Optional[PoolState]:
        """Return to the seed snapshot."""
        self._pool_history = self._pool_history[:1]
        self._last_quote = None
        return self.pool

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------

    def launch_plan(self, priority_fee: int = 0) -> LaunchCostPlan:
        return self.fees.plan_launch(self._require_config(), self.authority.flags, priority_fee=priority_fee)

    def preview(self, network_fee_lamports: int = None, exchange_rate=None) -> Preview:
        """
        Build a fresh preview of the current session.

        Args:
            network_fee_lamports: Fee to price (default: the launch cost plan)
            exchange_rate: Fiat per SOL (default: settings)
        """
        config = self._require_config()
        if network_fee_lamports is None:
            network_fee_lamports = self.launch_plan().network_fee_lamports
        if exchange_rate is None:
            exchange_rate = self.settings.exchange_rate

        fee = self.fees.estimate(config, network_fee_lamports, exchange_rate)

        # The last swap is shown as before/after only while it is the latest step
        quote = self._last_quote
        if quote is not None and quote.pool_after is not self.pool:
            quote = None

        return self.composer.compose(
            config,
            self.authority.flags,
            fee,
            pool_state=quote.pool_before if quote else self.pool,
            swap_quote=quote,
            network=self.network.name,
        )
