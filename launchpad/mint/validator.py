"""Config Validator - turns raw user input into a TokenConfig."""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlparse
import logging

from launchpad.config.settings import DEFAULT_DECIMALS
from launchpad.errors import (
    ConfigViolation,
    InvalidDecimals,
    InvalidLogoUri,
    InvalidName,
    InvalidSocialLink,
    InvalidSupply,
    InvalidSymbol,
    SupplyOverflow,
    ValidationError,
)
from launchpad.units import U64_MAX
from .models import MAX_DECIMALS, MAX_NAME_LENGTH, MAX_SYMBOL_LENGTH, TokenConfig

logger = logging.getLogger(__name__)


@dataclass
class ValidatorConfig:
    """Configuration for token config validation."""

    # Schemes accepted for logo and social links
    allowed_uri_schemes: Tuple[str, ...] = ("http", "https", "ipfs", "ar")

    # Applied when the raw input omits decimals
    default_decimals: int = DEFAULT_DECIMALS


DEFAULT_CONFIG = ValidatorConfig()


def _parse_int(value: Any) -> Optional[int]:
    """Parse an integer from an int or integer string. Returns None if not integral."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_text(value: Any) -> bool:
    """Missing (None) counts as text so it is reported as empty instead."""
    return value is None or isinstance(value, str)


class ConfigValidator:
    """
    Validates raw token configuration input.

    Input is a mapping with keys ``name``, ``symbol``, ``description``,
    ``decimals``, ``supply`` (``total_supply`` is accepted as an alias),
    ``logo_uri`` and ``socials``. Every constraint is checked in one pass and
    all violations are reported together in a single ValidationError.

    Usage:
        validator = ConfigValidator()
        config = validator.validate({"name": "Moon", "symbol": "moon", "supply": 1_000_000})
    """

    def __init__(self, config: ValidatorConfig = None):
        self.config = config or DEFAULT_CONFIG

    def validate(self, raw_input: Mapping[str, Any]) -> TokenConfig:
        """
        Validate and normalize a raw configuration.

        Args:
            raw_input: Raw user input (strings and numbers)

        Returns:
            A normalized TokenConfig

        Raises:
            ValidationError: With one violation per broken constraint
        """
        violations: List[ConfigViolation] = []

        name = self._check_name(raw_input.get("name"), violations)
        symbol = self._check_symbol(raw_input.get("symbol"), violations)
        decimals = self._check_decimals(raw_input.get("decimals"), violations)
        supply_raw = raw_input.get("supply", raw_input.get("total_supply"))
        supply = self._check_supply(supply_raw, decimals, violations)
        logo_uri = self._check_logo(raw_input.get("logo_uri"), violations)
        socials = self._check_socials(raw_input.get("socials"), violations)

        description = _clean(raw_input.get("description")) or None

        if violations:
            logger.debug(f"Rejected token config: {[repr(v) for v in violations]}")
            raise ValidationError(violations)

        return TokenConfig(
            name=name,
            symbol=symbol,
            decimals=decimals,
            supply=supply,
            description=description,
            logo_uri=logo_uri,
            socials=socials,
        )

    def _check_name(self, value: Any, violations: list) -> str:
        name = _clean(value)
        if not _is_text(value):
            violations.append(InvalidName("name must be a string", value))
        elif not name:
            violations.append(InvalidName("name must not be empty", value))
        elif len(name) > MAX_NAME_LENGTH:
            violations.append(
                InvalidName(f"name exceeds {MAX_NAME_LENGTH} characters", value)
            )
        return name

    def _check_symbol(self, value: Any, violations: list) -> str:
        symbol = _clean(value).upper()
        if not _is_text(value):
            violations.append(InvalidSymbol("symbol must be a string", value))
        elif not symbol:
            violations.append(InvalidSymbol("symbol must not be empty", value))
        elif len(symbol) > MAX_SYMBOL_LENGTH:
            violations.append(
                InvalidSymbol(f"symbol exceeds {MAX_SYMBOL_LENGTH} characters", value)
            )
        elif any(ch.isspace() for ch in symbol):
            violations.append(InvalidSymbol("symbol must not contain whitespace", value))
        return symbol

    def _check_decimals(self, value: Any, violations: list) -> Optional[int]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return self.config.default_decimals

        decimals = _parse_int(value)
        if decimals is None:
            violations.append(InvalidDecimals("decimals must be an integer", value))
            return None
        if not 0 <= decimals <= MAX_DECIMALS:
            violations.append(
                InvalidDecimals(f"decimals must be between 0 and {MAX_DECIMALS}", value)
            )
            return None
        return decimals

    def _check_supply(self, value: Any, decimals: Optional[int], violations: list) -> Optional[int]:
        supply = _parse_int(value)
        if supply is None:
            violations.append(InvalidSupply("supply must be a whole number", value))
            return None
        if supply <= 0:
            violations.append(InvalidSupply("supply must be greater than zero", value))
            return None
        if supply > U64_MAX:
            violations.append(SupplyOverflow("supply does not fit in 64 bits", value))
            return None
        # Only checkable against a valid decimals value
        if decimals is not None and supply * 10**decimals > U64_MAX:
            violations.append(
                SupplyOverflow(
                    f"supply x 10^{decimals} does not fit in 64 bits", value
                )
            )
            return None
        return supply

    def _check_logo(self, value: Any, violations: list) -> Optional[str]:
        if not _is_text(value):
            violations.append(InvalidLogoUri("logo_uri must be a string", value))
            return None
        uri = _clean(value)
        if not uri:
            return None
        if not self.is_valid_uri(uri):
            violations.append(InvalidLogoUri(f"malformed URI: {uri}", value))
        return uri

    def _check_socials(self, value: Any, violations: list) -> dict:
        if not value:
            return {}
        if not isinstance(value, Mapping):
            violations.append(InvalidSocialLink("socials must be a label -> URL mapping", value))
            return {}

        socials = {}
        for label, url in value.items():
            label_text = _clean(label)
            link = _clean(url)
            if not isinstance(label, str):
                violations.append(InvalidSocialLink("social label must be a string", label))
            elif not isinstance(url, str):
                violations.append(InvalidSocialLink(f"URL for '{label_text}' must be a string", url))
            elif not label_text:
                violations.append(InvalidSocialLink("social label must not be empty", label))
            elif not self.is_valid_uri(link):
                violations.append(
                    InvalidSocialLink(f"malformed URL for '{label_text}': {url}", url)
                )
            else:
                socials[label_text] = link
        return socials

    def is_valid_uri(self, uri: str) -> bool:
        """Syntax-only URI check. Nothing is fetched."""
        if not uri or any(ch.isspace() for ch in uri):
            return False
        try:
            parsed = urlparse(uri)
        except ValueError:
            return False
        return parsed.scheme.lower() in self.config.allowed_uri_schemes and bool(parsed.netloc)


_default_validator = ConfigValidator()


def validate(raw_input: Mapping[str, Any]) -> TokenConfig:
    """Validate ``raw_input`` with the default validator."""
    return _default_validator.validate(raw_input)
