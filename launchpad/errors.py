"""Error taxonomy for the launch simulator.

Every error is recoverable: the operation that raised it leaves the caller's
previous snapshot untouched.
"""

from typing import Iterable, List, Tuple, Type


class SimulatorError(Exception):
    """Base class for all simulator errors."""
    pass


# ============================================================================
# VALIDATION
# ============================================================================

class ConfigViolation(Exception):
    """A single broken constraint on a raw token configuration."""

    field: str = ""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.message = message
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field}: {self.message})"


class InvalidName(ConfigViolation):
    field = "name"


class InvalidSymbol(ConfigViolation):
    field = "symbol"


class InvalidDecimals(ConfigViolation):
    field = "decimals"


class InvalidSupply(ConfigViolation):
    field = "supply"


class SupplyOverflow(ConfigViolation):
    field = "supply"


class InvalidLogoUri(ConfigViolation):
    field = "logo_uri"


class InvalidSocialLink(ConfigViolation):
    field = "socials"


class ValidationError(SimulatorError):
    """Raised when a raw configuration breaks one or more constraints.

    All violations found in a single validation pass are collected in
    ``violations`` so the presentation layer can report them together.
    """

    def __init__(self, violations: Iterable[ConfigViolation]):
        self.violations: Tuple[ConfigViolation, ...] = tuple(violations)
        summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"Invalid token configuration ({summary})")

    def has(self, kind: Type[ConfigViolation]) -> bool:
        """Returns True if any collected violation is of ``kind``."""
        return any(isinstance(v, kind) for v in self.violations)

    @property
    def fields(self) -> List[str]:
        """Names of the fields that failed, in report order."""
        return [v.field for v in self.violations]


# ============================================================================
# AUTHORITY
# ============================================================================

class AuthorityError(SimulatorError):
    """Raised when an authority transition or authority-gated action is illegal."""

    def __init__(self, message: str, authority=None):
        super().__init__(message)
        self.authority = authority


class IrreversibleAuthority(AuthorityError):
    """Raised when re-enabling an authority that was already revoked."""
    pass


class AuthorityRevoked(AuthorityError):
    """Raised when an action needs an authority that has been revoked."""
    pass


# ============================================================================
# POOL
# ============================================================================

class PoolError(SimulatorError):
    """Raised when a pool operation violates an arithmetic or liquidity constraint."""
    pass


class InvalidSeed(PoolError):
    pass


class ZeroAmount(PoolError):
    pass


class InvalidFee(PoolError):
    pass


class InsufficientLiquidity(PoolError):
    pass


class InsufficientOutput(PoolError):
    pass


class ReserveOverflow(PoolError):
    pass


class UnbalancedDeposit(PoolError):
    pass


class InvalidShare(PoolError):
    pass


# ============================================================================
# ESTIMATION / PREVIEW
# ============================================================================

class EstimationError(SimulatorError):
    """Raised when fee estimation inputs are unusable."""
    pass


class InvalidExchangeRate(EstimationError):
    pass


class InvalidFeeAmount(EstimationError):
    pass


class IncompletePreview(SimulatorError):
    """Raised when a preview is composed without a required part.

    This signals a caller defect rather than a user input error.
    """

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Preview is missing: {', '.join(self.missing)}")
