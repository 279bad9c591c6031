"""Fee Estimator - simulated Solana launch fees in SOL and fiat."""

from decimal import Decimal, DecimalException, InvalidOperation, localcontext
from typing import List
import logging

from launchpad.errors import InvalidExchangeRate, InvalidFeeAmount
from launchpad.mint.models import Authority, AuthorityFlags, TokenConfig
from launchpad.units import lamports_to_sol, quantize, to_decimal
from .models import DEFAULT_CONFIG, FeeConfig, FeeEstimate, LaunchCostPlan, LaunchStep

logger = logging.getLogger(__name__)

# Significant digits for fee conversion; a u64 lamport amount is 20 digits
CONVERSION_PRECISION = 80


class FeeEstimator:
    """
    Converts lamport fees to SOL and fiat, and prices a launch sequence.

    All math is Decimal; rounding happens once, at display precision, with
    ROUND_HALF_EVEN so repeated conversions do not drift.

    Usage:
        estimator = FeeEstimator()
        plan = estimator.plan_launch(config, authority.flags)
        fee = estimator.estimate(config, plan.network_fee_lamports, Decimal("150"))
    """

    def __init__(self, config: FeeConfig = None):
        self.config = config or DEFAULT_CONFIG

    def estimate(
        self,
        config: TokenConfig,
        network_fee_lamports: int,
        exchange_rate,
    ) -> FeeEstimate:
        """
        Estimate the fee in SOL and fiat.

        Args:
            config: Token being launched
            network_fee_lamports: Fee in lamports
            exchange_rate: Fiat per 1 SOL (Decimal, int or numeric string)

        Returns:
            FeeEstimate rounded to display precision

        Raises:
            InvalidExchangeRate: If the rate is not a positive number or too
                large to price the fee at display precision
            InvalidFeeAmount: If the lamport amount is negative or not an integer
        """
        rate = self._parse_rate(exchange_rate)

        if isinstance(network_fee_lamports, bool) or not isinstance(network_fee_lamports, int):
            raise InvalidFeeAmount(f"Fee must be an integer lamport amount, got {network_fee_lamports!r}")
        if network_fee_lamports < 0:
            raise InvalidFeeAmount(f"Fee cannot be negative: {network_fee_lamports}")

        try:
            with localcontext() as ctx:
                ctx.prec = CONVERSION_PRECISION
                sol = lamports_to_sol(network_fee_lamports)
                native_fee = quantize(sol, self.config.native_precision)
                fiat_fee = quantize(sol * rate, self.config.fiat_precision)
        except DecimalException:
            raise InvalidExchangeRate(
                f"Exchange rate {exchange_rate} is too large to price {network_fee_lamports} lamports"
            )

        estimate = FeeEstimate(
            lamports=network_fee_lamports,
            native_fee=native_fee,
            fiat_fee=fiat_fee,
            exchange_rate=rate,
            fiat_currency=self.config.fiat_currency,
            token_symbol=config.symbol if config else None,
        )

        logger.debug(
            f"Fee estimate for {estimate.token_symbol}: {network_fee_lamports} lamports = "
            f"{estimate.native_fee} SOL = {estimate.fiat_fee} {estimate.fiat_currency}"
        )
        return estimate

    def _parse_rate(self, exchange_rate) -> Decimal:
        try:
            rate = to_decimal(exchange_rate)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidExchangeRate(f"Exchange rate is not a number: {exchange_rate!r}")

        if not rate.is_finite() or rate <= 0:
            raise InvalidExchangeRate(f"Exchange rate must be positive, got {exchange_rate}")
        return rate

    def rent_exempt_minimum(self, data_len: int) -> int:
        """Lamports an account of ``data_len`` bytes must hold to be rent exempt."""
        cfg = self.config
        return (
            (cfg.account_storage_overhead + data_len)
            * cfg.lamports_per_byte_year
            * cfg.exemption_threshold_years
        )

    def priority_cost(self, priority_fee: int, compute_units: int = None) -> int:
        """
        Priority cost in lamports.

        Args:
            priority_fee: Priority fee in microlamports per compute unit
            compute_units: Compute units used (default from config)
        """
        compute_units = compute_units or self.config.default_compute_units
        return compute_units * priority_fee // 1_000_000

    def plan_launch(
        self,
        config: TokenConfig,
        authority: AuthorityFlags,
        with_metadata: bool = True,
        priority_fee: int = 0,
    ) -> LaunchCostPlan:
        """
        Price the transactions a launch of ``config`` would need.

        The sequence is: create the mint, create the creator's token account,
        mint the initial supply, write metadata, then one authorize
        transaction per revoked authority.

        Args:
            config: Token being launched
            authority: Authority state the launch should end in
            with_metadata: Whether a metadata account is created
            priority_fee: Priority fee in microlamports per compute unit

        Returns:
            LaunchCostPlan with one LaunchStep per transaction
        """
        cfg = self.config
        priority = self.priority_cost(priority_fee)

        def step(name: str, signatures: int = 1, rent: int = 0) -> LaunchStep:
            return LaunchStep(
                name=name,
                signatures=signatures,
                rent_lamports=rent,
                priority_lamports=priority,
                lamports_per_signature=cfg.lamports_per_signature,
            )

        steps: List[LaunchStep] = [
            # Payer and the new mint keypair both sign
            step("create_mint", signatures=2, rent=self.rent_exempt_minimum(cfg.mint_account_size)),
            step("create_token_account", rent=self.rent_exempt_minimum(cfg.token_account_size)),
            step("mint_initial_supply"),
        ]

        if with_metadata:
            steps.append(
                step("create_metadata", rent=self.rent_exempt_minimum(cfg.metadata_account_size))
            )

        for revoked in authority.revoked:
            if revoked == Authority.UPDATE and not with_metadata:
                continue
            steps.append(step(f"revoke_{revoked.value}_authority"))

        plan = LaunchCostPlan(steps=steps)
        logger.debug(
            f"Launch plan for {config.symbol}: {plan.transaction_count} txs, "
            f"{plan.network_fee_lamports} lamports"
        )
        return plan
