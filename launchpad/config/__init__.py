"""Simulator configuration package."""

from .settings import (
    NETWORKS,
    DEFAULT_NETWORK,
    DEFAULT_DECIMALS,
    NetworkProfile,
    SimulatorSettings,
    resolve_network,
)

__all__ = [
    "NETWORKS",
    "DEFAULT_NETWORK",
    "DEFAULT_DECIMALS",
    "NetworkProfile",
    "SimulatorSettings",
    "resolve_network",
]
