"""Authority-gated token actions: minting more supply and rewriting metadata."""

from typing import Optional
import logging

from launchpad.errors import InvalidSupply, SupplyOverflow, ValidationError
from launchpad.units import U64_MAX
from .authority import AuthorityStateMachine
from .models import Authority, TokenConfig
from .validator import ConfigValidator

logger = logging.getLogger(__name__)

# Fields the update authority may rewrite
METADATA_FIELDS = ("name", "symbol", "description", "logo_uri", "socials")


def mint_to(
    config: TokenConfig,
    authority: AuthorityStateMachine,
    amount: int,
) -> TokenConfig:
    """
    Simulate minting ``amount`` whole tokens to the creator's account.

    Args:
        config: Current token configuration
        authority: Session authority state
        amount: Whole tokens to mint

    Returns:
        A new TokenConfig with the increased supply

    Raises:
        AuthorityRevoked: If the mint authority has been revoked
        ValidationError: If the amount is not positive or the supply overflows
    """
    authority.require(Authority.MINT)

    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError([InvalidSupply("mint amount must be a positive whole number", amount)])

    new_supply = config.supply + amount
    if new_supply * 10**config.decimals > U64_MAX:
        raise ValidationError(
            [SupplyOverflow(f"minting {amount} would overflow the 64-bit supply", amount)]
        )

    logger.info(f"Minted {amount} {config.symbol} (supply {config.supply} -> {new_supply})")
    return config.with_changes(supply=new_supply)


def update_metadata(
    config: TokenConfig,
    authority: AuthorityStateMachine,
    validator: Optional[ConfigValidator] = None,
    **changes,
) -> TokenConfig:
    """
    Simulate a metadata update signed by the update authority.

    The merged configuration is validated again from scratch, so an update
    cannot smuggle in a value the validator would reject.

    Raises:
        AuthorityRevoked: If the update authority has been revoked
        ValueError: If a non-metadata field is passed
        ValidationError: If the merged configuration is invalid
    """
    authority.require(Authority.UPDATE)

    unknown = set(changes) - set(METADATA_FIELDS)
    if unknown:
        raise ValueError(f"Not a metadata field: {', '.join(sorted(unknown))}")

    raw = config.to_dict()
    raw.pop("base_unit_supply")
    raw.update(changes)

    updated = (validator or ConfigValidator()).validate(raw)
    logger.info(f"Updated metadata for {updated.symbol}: {sorted(changes)}")
    return updated
