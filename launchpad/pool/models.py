"""Data models for the constant-product pool simulator."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from launchpad.units import from_base_units


class SwapDirection(str, Enum):
    """Which reserve receives the input amount."""

    A_TO_B = "a_to_b"  # Sell the launched token for the quote asset
    B_TO_A = "b_to_a"  # Buy the launched token with the quote asset


@dataclass
class PoolConfig:
    """Configuration for pool simulation."""

    # Swap fee taken from the input (Raydium AMM v4 charges 25 bps)
    fee_bps: int = 25

    # Slippage tolerance applied to min_amount_out
    slippage_bps: int = 50  # 0.5%

    # Max relative deviation of a deposit from the pool ratio
    deposit_tolerance: Decimal = Decimal("0.005")  # 0.5%

    # Pool shares minted per unit of sqrt(reserve_a * reserve_b) at seed time
    share_precision: int = 1_000_000


@dataclass(frozen=True)
class PoolState:
    """
    Immutable snapshot of a constant-product pool.

    Reserves are integer base units. ``lp_supply`` counts all pool shares;
    ``position_shares`` is the part owned by the simulating user (the mock
    seed liquidity is never theirs).
    """

    reserve_a: int
    reserve_b: int
    lp_supply: int
    position_shares: int = 0
    decimals_a: int = 0
    decimals_b: int = 0

    @property
    def k(self) -> int:
        """Constant product reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    @property
    def spot_price_a_in_b(self) -> Decimal:
        """Display price of one whole A token in whole B tokens."""
        return self.display_reserve_b / self.display_reserve_a

    @property
    def display_reserve_a(self) -> Decimal:
        return from_base_units(self.reserve_a, self.decimals_a)

    @property
    def display_reserve_b(self) -> Decimal:
        return from_base_units(self.reserve_b, self.decimals_b)

    @property
    def position_fraction(self) -> Decimal:
        """Share of the pool owned by the user, 0..1."""
        return Decimal(self.position_shares) / Decimal(self.lp_supply)

    def to_dict(self) -> dict:
        return {
            "reserve_a": str(self.reserve_a),
            "reserve_b": str(self.reserve_b),
            "k": str(self.k),
            "lp_supply": str(self.lp_supply),
            "position_shares": str(self.position_shares),
            "spot_price_a_in_b": str(self.spot_price_a_in_b),
        }


@dataclass(frozen=True)
class SwapQuote:
    """Outcome of a simulated swap. ``pool_after`` is the state if adopted."""

    direction: SwapDirection
    amount_in: int
    fee_bps: int
    fee_amount: int
    amount_in_after_fee: int
    amount_out: int
    min_amount_out: int
    spot_price: Decimal       # reserve_out / reserve_in before the swap
    execution_price: Decimal  # amount_out / amount_in
    price_impact: Decimal     # 0.01 = 1%, fee excluded
    pool_before: PoolState
    pool_after: PoolState

    def to_dict(self) -> dict:
        return {
            "direction": self.direction.value,
            "amount_in": str(self.amount_in),
            "fee_bps": self.fee_bps,
            "fee_amount": str(self.fee_amount),
            "amount_in_after_fee": str(self.amount_in_after_fee),
            "amount_out": str(self.amount_out),
            "min_amount_out": str(self.min_amount_out),
            "spot_price": str(self.spot_price),
            "execution_price": str(self.execution_price),
            "price_impact": str(self.price_impact),
            "pool_before": self.pool_before.to_dict(),
            "pool_after": self.pool_after.to_dict(),
        }


@dataclass(frozen=True)
class DepositResult:
    """
    Outcome of a simulated liquidity deposit.

    ``amount_a`` / ``amount_b`` are what the pool actually took at its
    current ratio; ``unused_a`` / ``unused_b`` stay with the depositor.
    """

    amount_a: int
    amount_b: int
    shares_minted: int
    pool: PoolState
    unused_a: int = 0
    unused_b: int = 0


@dataclass(frozen=True)
class WithdrawResult:
    """Outcome of a simulated liquidity withdrawal."""

    amount_a: int
    amount_b: int
    shares_burned: int
    pool: PoolState

    def __iter__(self):
        # Allows `amount_a, amount_b = simulator.withdraw(...)`
        return iter((self.amount_a, self.amount_b))


# Default configuration
DEFAULT_CONFIG = PoolConfig()
