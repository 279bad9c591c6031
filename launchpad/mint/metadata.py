"""Token metadata document, in the shape a Metaplex metadata upload expects."""

import json

from .models import TokenConfig


def build_metadata_document(config: TokenConfig) -> dict:
    """
    Build the off-chain metadata JSON for a token.

    Nothing is uploaded or written; the document is only shown in the preview.
    """
    document = {
        "name": config.name,
        "symbol": config.symbol,
        "description": config.description or "",
        "image": config.logo_uri or "",
        "uri": config.logo_uri or "",
        "seller_fee_basis_points": 0,
        "creators": None,
    }
    if config.socials:
        document["extensions"] = dict(config.socials)
    return document


def metadata_json(config: TokenConfig) -> str:
    return json.dumps(build_metadata_document(config), indent=2)
