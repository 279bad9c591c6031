"""Liquidity Pool Simulator - constant-product (x*y=k) pool preview."""

from dataclasses import replace
from decimal import Decimal, InvalidOperation
from math import isqrt
from typing import Optional
import logging

from launchpad.errors import (
    InsufficientLiquidity,
    InsufficientOutput,
    InvalidFee,
    InvalidSeed,
    InvalidShare,
    PoolError,
    ReserveOverflow,
    UnbalancedDeposit,
    ZeroAmount,
)
from launchpad.mint.models import TokenConfig
from launchpad.units import SOL_DECIMALS, fits_u64, to_base_units, to_decimal
from .models import (
    DEFAULT_CONFIG,
    DepositResult,
    PoolConfig,
    PoolState,
    SwapDirection,
    SwapQuote,
    WithdrawResult,
)

logger = logging.getLogger(__name__)

BPS_DENOMINATOR = 10_000


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _require_amount(value, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{label} must be an integer amount of base units, got {value!r}")
    if value <= 0:
        raise ZeroAmount(f"{label} must be greater than zero")
    return value


class LiquidityPoolSimulator:
    """
    Simulates a Raydium-style constant-product pool.

    Token A is the launched token, token B the quote asset (SOL). All math
    is on integer base units; Decimal is only used for display prices and
    ratios. Every operation returns a new snapshot and never touches the
    pool it was given, so a caller can "undo" by keeping the old one.

    Swap math (fee taken from the input first):
        amount_in_after_fee = amount_in * (10000 - fee_bps) // 10000
        amount_out = reserve_out - ceil(k / (reserve_in + amount_in_after_fee))

    The full amount_in is credited to the input reserve, so the fee stays
    in the pool and k never decreases.
    """

    def __init__(self, config: PoolConfig = None):
        self.config = config or DEFAULT_CONFIG

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def initialize(
        self,
        seed_reserve_a: int,
        seed_reserve_b: int,
        decimals_a: int = 0,
        decimals_b: int = 0,
    ) -> PoolState:
        """
        Create a pool from mock seed reserves.

        Raises:
            InvalidSeed: If a reserve is not a positive u64 integer
        """
        for label, reserve in (("reserve_a", seed_reserve_a), ("reserve_b", seed_reserve_b)):
            if isinstance(reserve, bool) or not isinstance(reserve, int):
                raise InvalidSeed(f"Seed {label} must be an integer, got {reserve!r}")
            if reserve <= 0:
                raise InvalidSeed(f"Seed {label} must be greater than zero")
            if not fits_u64(reserve):
                raise InvalidSeed(f"Seed {label} does not fit in 64 bits")

        lp_supply = isqrt(seed_reserve_a * seed_reserve_b) * self.config.share_precision
        pool = PoolState(
            reserve_a=seed_reserve_a,
            reserve_b=seed_reserve_b,
            lp_supply=lp_supply,
            decimals_a=decimals_a,
            decimals_b=decimals_b,
        )
        logger.info(f"Initialized pool: reserves {seed_reserve_a}/{seed_reserve_b}, k={pool.k}")
        return pool

    def seed_from_config(
        self,
        config: TokenConfig,
        token_amount,
        quote_amount,
    ) -> PoolState:
        """
        Seed a pool pairing the configured token with SOL.

        Args:
            config: Validated token configuration
            token_amount: Whole-token amount of the launched token (display units)
            quote_amount: SOL amount (display units)

        Raises:
            InvalidSeed: If an amount is unusable or exceeds the token supply
        """
        try:
            reserve_a = to_base_units(token_amount, config.decimals)
            reserve_b = to_base_units(quote_amount, SOL_DECIMALS)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidSeed(f"Seed amounts must be numbers: {token_amount!r}, {quote_amount!r}")

        if reserve_a > config.base_unit_supply:
            raise InvalidSeed(
                f"Cannot seed {token_amount} {config.symbol}: total supply is {config.supply}"
            )

        return self.initialize(reserve_a, reserve_b, config.decimals, SOL_DECIMALS)

    # ------------------------------------------------------------------
    # Swaps
    # ------------------------------------------------------------------

    def quote_swap(
        self,
        pool: PoolState,
        amount_in: int,
        direction: SwapDirection,
        fee_bps: Optional[int] = None,
        slippage_bps: Optional[int] = None,
    ) -> SwapQuote:
        """
        Quote a swap against ``pool``.

        Args:
            pool: Pool snapshot to quote against
            amount_in: Input amount in base units
            direction: Which side is sold into the pool
            fee_bps: Swap fee in basis points (default from config)
            slippage_bps: Tolerance used for min_amount_out (default from config)

        Returns:
            SwapQuote carrying both the old and the resulting pool state

        Raises:
            ZeroAmount: If amount_in is not positive
            InvalidFee: If fee_bps is outside [0, 10000)
            InsufficientOutput: If the swap would return nothing
            InsufficientLiquidity: If the output reserve would be drained
            ReserveOverflow: If the input reserve would exceed 64 bits
        """
        amount_in = _require_amount(amount_in, "amount_in")
        direction = SwapDirection(direction)
        fee_bps = self.config.fee_bps if fee_bps is None else fee_bps
        slippage_bps = self.config.slippage_bps if slippage_bps is None else slippage_bps

        if isinstance(fee_bps, bool) or not isinstance(fee_bps, int) or not 0 <= fee_bps < BPS_DENOMINATOR:
            raise InvalidFee(f"fee_bps must be in [0, {BPS_DENOMINATOR}), got {fee_bps!r}")
        if not 0 <= slippage_bps <= BPS_DENOMINATOR:
            raise PoolError(f"slippage_bps must be in [0, {BPS_DENOMINATOR}], got {slippage_bps!r}")

        if direction == SwapDirection.A_TO_B:
            reserve_in, reserve_out = pool.reserve_a, pool.reserve_b
        else:
            reserve_in, reserve_out = pool.reserve_b, pool.reserve_a

        amount_in_after_fee = amount_in * (BPS_DENOMINATOR - fee_bps) // BPS_DENOMINATOR
        fee_amount = amount_in - amount_in_after_fee
        if amount_in_after_fee == 0:
            raise InsufficientOutput(f"Swap of {amount_in} is consumed entirely by the fee")

        k = pool.k
        amount_out = reserve_out - _ceil_div(k, reserve_in + amount_in_after_fee)

        if amount_out <= 0:
            raise InsufficientOutput(f"Swap of {amount_in} yields no output")
        if amount_out >= reserve_out:
            raise InsufficientLiquidity("Swap would drain the output reserve")

        new_reserve_in = reserve_in + amount_in
        new_reserve_out = reserve_out - amount_out
        if not fits_u64(new_reserve_in):
            raise ReserveOverflow("Swap would push the input reserve past 64 bits")

        if direction == SwapDirection.A_TO_B:
            pool_after = replace(pool, reserve_a=new_reserve_in, reserve_b=new_reserve_out)
        else:
            pool_after = replace(pool, reserve_a=new_reserve_out, reserve_b=new_reserve_in)

        spot_price = Decimal(reserve_out) / Decimal(reserve_in)
        execution_price = Decimal(amount_out) / Decimal(amount_in)
        # Impact excludes the fee: compare against what the fee-free input would fetch at spot
        price_impact = Decimal(1) - (
            Decimal(amount_out) / (Decimal(amount_in_after_fee) * spot_price)
        )
        min_amount_out = amount_out * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR

        logger.debug(
            f"Swap quote {direction.value}: in={amount_in} fee={fee_amount} out={amount_out} "
            f"impact={price_impact:.6f} k {k} -> {pool_after.k}"
        )

        return SwapQuote(
            direction=direction,
            amount_in=amount_in,
            fee_bps=fee_bps,
            fee_amount=fee_amount,
            amount_in_after_fee=amount_in_after_fee,
            amount_out=amount_out,
            min_amount_out=min_amount_out,
            spot_price=spot_price,
            execution_price=execution_price,
            price_impact=price_impact,
            pool_before=pool,
            pool_after=pool_after,
        )

    # ------------------------------------------------------------------
    # Liquidity
    # ------------------------------------------------------------------

    def deposit(self, pool: PoolState, amount_a: int, amount_b: int) -> DepositResult:
        """
        Add liquidity at the current pool ratio.

        The side that mints fewer shares is taken in full; the other side is
        trimmed to the matching amount (rounded up, in the pool's favor) and
        the rest is reported back as unused.

        Raises:
            ZeroAmount: If an amount is not positive or too small to mint shares
            UnbalancedDeposit: If amount_a / amount_b strays from the pool
                ratio by more than the configured tolerance
            ReserveOverflow: If a reserve would exceed 64 bits
        """
        amount_a = _require_amount(amount_a, "amount_a")
        amount_b = _require_amount(amount_b, "amount_b")

        # |(a/b) / (ra/rb) - 1| computed without division until the end
        deviation = Decimal(abs(amount_a * pool.reserve_b - amount_b * pool.reserve_a)) / Decimal(
            amount_b * pool.reserve_a
        )
        if deviation > self.config.deposit_tolerance:
            raise UnbalancedDeposit(
                f"Deposit ratio deviates {deviation:.4%} from the pool ratio "
                f"(tolerance {self.config.deposit_tolerance:.2%})"
            )

        # Take the limiting side in full and only the matching amount of the other
        used_b = _ceil_div(amount_a * pool.reserve_b, pool.reserve_a)
        if used_b <= amount_b:
            used_a = amount_a
            shares = amount_a * pool.lp_supply // pool.reserve_a
        else:
            used_a = _ceil_div(amount_b * pool.reserve_a, pool.reserve_b)
            used_b = amount_b
            shares = amount_b * pool.lp_supply // pool.reserve_b
        if shares == 0:
            raise ZeroAmount("Deposit is too small to mint any pool shares")

        new_reserve_a = pool.reserve_a + used_a
        new_reserve_b = pool.reserve_b + used_b
        if not (fits_u64(new_reserve_a) and fits_u64(new_reserve_b)):
            raise ReserveOverflow("Deposit would push a reserve past 64 bits")

        new_pool = replace(
            pool,
            reserve_a=new_reserve_a,
            reserve_b=new_reserve_b,
            lp_supply=pool.lp_supply + shares,
            position_shares=pool.position_shares + shares,
        )
        logger.info(
            f"Deposit {used_a}/{used_b} minted {shares} shares "
            f"(unused {amount_a - used_a}/{amount_b - used_b})"
        )
        return DepositResult(
            amount_a=used_a,
            amount_b=used_b,
            shares_minted=shares,
            pool=new_pool,
            unused_a=amount_a - used_a,
            unused_b=amount_b - used_b,
        )

    def withdraw(self, pool: PoolState, share_fraction) -> WithdrawResult:
        """
        Withdraw a fraction of the user's position.

        Args:
            pool: Pool snapshot
            share_fraction: Fraction of the user's shares to burn, in (0, 1]

        Raises:
            InvalidShare: If the fraction is outside (0, 1] or burns nothing
            InsufficientLiquidity: If the user holds no position
        """
        try:
            fraction = to_decimal(share_fraction)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidShare(f"share_fraction must be a number, got {share_fraction!r}")

        if not fraction.is_finite() or not Decimal(0) < fraction <= Decimal(1):
            raise InvalidShare(f"share_fraction must be in (0, 1], got {share_fraction}")
        if pool.position_shares == 0:
            raise InsufficientLiquidity("No liquidity position to withdraw")

        if fraction == 1:
            shares = pool.position_shares
        else:
            shares = int(Decimal(pool.position_shares) * fraction)
        if shares == 0:
            raise InvalidShare(f"share_fraction {share_fraction} burns no shares")

        amount_a = pool.reserve_a * shares // pool.lp_supply
        amount_b = pool.reserve_b * shares // pool.lp_supply

        new_pool = replace(
            pool,
            reserve_a=pool.reserve_a - amount_a,
            reserve_b=pool.reserve_b - amount_b,
            lp_supply=pool.lp_supply - shares,
            position_shares=pool.position_shares - shares,
        )
        logger.info(f"Withdrew {amount_a}/{amount_b} burning {shares} shares")
        return WithdrawResult(amount_a=amount_a, amount_b=amount_b, shares_burned=shares, pool=new_pool)
