"""Data models for fee estimation."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class FeeConfig:
    """Configuration for fee estimation."""

    # Display precision (fractional digits), banker's rounding
    native_precision: int = 6
    fiat_precision: int = 2
    fiat_currency: str = "USD"

    # Base transaction fee per signature (lamports)
    lamports_per_signature: int = 5_000

    # Compute units assumed per launch transaction
    default_compute_units: int = 200_000

    # Rent parameters (rent-exempt minimum = (overhead + len) * rate * threshold)
    account_storage_overhead: int = 128
    lamports_per_byte_year: int = 3_480
    exemption_threshold_years: int = 2

    # Account sizes (bytes)
    mint_account_size: int = 82
    token_account_size: int = 165
    metadata_account_size: int = 679


@dataclass(frozen=True)
class FeeEstimate:
    """Simulated network fee in native and fiat units."""

    lamports: int
    native_fee: Decimal  # SOL, rounded to native precision
    fiat_fee: Decimal    # fiat, rounded to fiat precision
    exchange_rate: Decimal  # fiat per 1 SOL
    fiat_currency: str = "USD"
    token_symbol: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "lamports": self.lamports,
            "native_fee": str(self.native_fee),
            "fiat_fee": str(self.fiat_fee),
            "exchange_rate": str(self.exchange_rate),
            "fiat_currency": self.fiat_currency,
        }


@dataclass(frozen=True)
class LaunchStep:
    """One simulated transaction of the launch sequence."""

    name: str
    signatures: int = 1
    rent_lamports: int = 0
    priority_lamports: int = 0
    lamports_per_signature: int = 5_000

    @property
    def fee_lamports(self) -> int:
        """Transaction fee (base + priority), excluding rent deposits."""
        return self.signatures * self.lamports_per_signature + self.priority_lamports

    @property
    def total_lamports(self) -> int:
        return self.fee_lamports + self.rent_lamports


@dataclass(frozen=True)
class LaunchCostPlan:
    """Itemized cost of deploying a token configuration."""

    steps: List[LaunchStep] = field(default_factory=list)

    @property
    def transaction_count(self) -> int:
        return len(self.steps)

    @property
    def fee_lamports(self) -> int:
        return sum(step.fee_lamports for step in self.steps)

    @property
    def rent_lamports(self) -> int:
        return sum(step.rent_lamports for step in self.steps)

    @property
    def network_fee_lamports(self) -> int:
        """Everything the creator pays: fees plus rent-exempt deposits."""
        return self.fee_lamports + self.rent_lamports

    def to_dict(self) -> dict:
        return {
            "steps": [
                {
                    "name": step.name,
                    "signatures": step.signatures,
                    "fee_lamports": step.fee_lamports,
                    "rent_lamports": step.rent_lamports,
                }
                for step in self.steps
            ],
            "fee_lamports": self.fee_lamports,
            "rent_lamports": self.rent_lamports,
            "network_fee_lamports": self.network_fee_lamports,
        }


# Default configuration
DEFAULT_CONFIG = FeeConfig()
