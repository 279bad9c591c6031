"""Token Configuration Module - validation, authorities and metadata."""

from .models import Authority, AuthorityFlags, AuthorityState, TokenConfig
from .validator import ConfigValidator, ValidatorConfig, validate
from .authority import AuthorityStateMachine
from .actions import mint_to, update_metadata
from .metadata import build_metadata_document, metadata_json

__all__ = [
    "Authority",
    "AuthorityFlags",
    "AuthorityState",
    "TokenConfig",
    "ConfigValidator",
    "ValidatorConfig",
    "validate",
    "AuthorityStateMachine",
    "mint_to",
    "update_metadata",
    "build_metadata_document",
    "metadata_json",
]
