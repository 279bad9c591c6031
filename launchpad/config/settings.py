"""Runtime settings for the launch simulator, read from the environment."""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional

from dotenv import load_dotenv

load_dotenv()


# Cluster endpoints offered when picking a network. Display only: the
# simulator never opens a connection.
NETWORKS: Dict[str, str] = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
}

DEFAULT_NETWORK = "mainnet-beta"
DEFAULT_DECIMALS = 9


@dataclass(frozen=True)
class NetworkProfile:
    """Network the simulated launch targets."""

    name: str
    rpc_url: str

    @property
    def is_mainnet(self) -> bool:
        return self.name == "mainnet-beta"


def resolve_network(name: Optional[str] = None, rpc_url: Optional[str] = None) -> NetworkProfile:
    """
    Resolve a network profile.

    A non-empty ``rpc_url`` always wins and yields a "custom" profile.
    Unknown names fall back to mainnet-beta.
    """
    if rpc_url and rpc_url.strip():
        return NetworkProfile(name="custom", rpc_url=rpc_url.strip())

    key = (name or DEFAULT_NETWORK).strip().lower()
    if key not in NETWORKS:
        key = DEFAULT_NETWORK
    return NetworkProfile(name=key, rpc_url=NETWORKS[key])


@dataclass
class SimulatorSettings:
    """Settings shared by the CLI and simulation sessions."""

    # Network selection
    network: str = field(
        default_factory=lambda: os.getenv("SIM_NETWORK", DEFAULT_NETWORK)
    )
    rpc_url: str = field(default_factory=lambda: os.getenv("SIM_RPC_URL", ""))

    # Static fiat rate (fiat per 1 SOL); no price feed is queried
    exchange_rate: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("SIM_EXCHANGE_RATE", "150.00"))
    )
    fiat_currency: str = field(
        default_factory=lambda: os.getenv("SIM_FIAT_CURRENCY", "USD")
    )

    # Display precision
    native_precision: int = field(
        default_factory=lambda: int(os.getenv("SIM_NATIVE_PRECISION", "6"))
    )
    fiat_precision: int = field(
        default_factory=lambda: int(os.getenv("SIM_FIAT_PRECISION", "2"))
    )

    # Pool defaults
    pool_fee_bps: int = field(
        default_factory=lambda: int(os.getenv("SIM_POOL_FEE_BPS", "25"))
    )
    slippage_bps: int = field(
        default_factory=lambda: int(os.getenv("SIM_SLIPPAGE_BPS", "50"))
    )
    deposit_tolerance: Decimal = field(
        default_factory=lambda: Decimal(os.getenv("SIM_DEPOSIT_TOLERANCE", "0.005"))
    )

    log_level: str = field(
        default_factory=lambda: os.getenv("SIM_LOG_LEVEL", "INFO")
    )

    @property
    def network_profile(self) -> NetworkProfile:
        return resolve_network(self.network, self.rpc_url)

    def fee_config(self):
        """Build a FeeConfig from these settings."""
        from launchpad.fees.models import FeeConfig

        return FeeConfig(
            native_precision=self.native_precision,
            fiat_precision=self.fiat_precision,
            fiat_currency=self.fiat_currency,
        )

    def pool_config(self):
        """Build a PoolConfig from these settings."""
        from launchpad.pool.models import PoolConfig

        return PoolConfig(
            fee_bps=self.pool_fee_bps,
            slippage_bps=self.slippage_bps,
            deposit_tolerance=self.deposit_tolerance,
        )
