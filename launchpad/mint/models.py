"""Data models for token configuration and authority state."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional

from launchpad.units import from_base_units


# Metaplex metadata limits
MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_DECIMALS = 9


class Authority(str, Enum):
    """Authorities a launched token can retain."""

    MINT = "mint"       # May increase supply
    FREEZE = "freeze"   # May freeze holder token accounts
    UPDATE = "update"   # May rewrite metadata


class AuthorityState(str, Enum):
    """State of a single authority. REVOKED is terminal."""

    ENABLED = "enabled"
    REVOKED = "revoked"


@dataclass(frozen=True)
class TokenConfig:
    """A validated token configuration. Build through ConfigValidator."""

    name: str
    symbol: str
    decimals: int
    supply: int  # whole tokens
    description: Optional[str] = None
    logo_uri: Optional[str] = None
    socials: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Keep the snapshot read-only all the way down
        object.__setattr__(self, "socials", MappingProxyType(dict(self.socials)))

    @property
    def base_unit_supply(self) -> int:
        """Total supply expressed in the smallest on-chain unit."""
        return self.supply * 10**self.decimals

    @property
    def display_supply(self) -> Decimal:
        return from_base_units(self.base_unit_supply, self.decimals)

    def with_changes(self, **changes) -> "TokenConfig":
        """Return a copy with ``changes`` applied. Callers re-validate."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "description": self.description,
            "decimals": self.decimals,
            "supply": self.supply,
            "base_unit_supply": str(self.base_unit_supply),
            "logo_uri": self.logo_uri,
            "socials": dict(self.socials),
        }


@dataclass(frozen=True)
class AuthorityFlags:
    """Snapshot of the three token authorities."""

    mint: AuthorityState = AuthorityState.ENABLED
    freeze: AuthorityState = AuthorityState.ENABLED
    update: AuthorityState = AuthorityState.ENABLED

    def state(self, authority: Authority) -> AuthorityState:
        return getattr(self, Authority(authority).value)

    def is_enabled(self, authority: Authority) -> bool:
        return self.state(authority) == AuthorityState.ENABLED

    @property
    def mintable(self) -> bool:
        return self.mint == AuthorityState.ENABLED

    @property
    def freezable(self) -> bool:
        return self.freeze == AuthorityState.ENABLED

    @property
    def updatable(self) -> bool:
        return self.update == AuthorityState.ENABLED

    @property
    def retained(self) -> List[Authority]:
        """Authorities still held by the creator."""
        return [a for a in Authority if self.is_enabled(a)]

    @property
    def revoked(self) -> List[Authority]:
        return [a for a in Authority if not self.is_enabled(a)]

    @property
    def is_fully_decentralized(self) -> bool:
        return not self.retained

    def to_dict(self) -> dict:
        return {a.value: self.state(a).value for a in Authority}
