#!/usr/bin/env python3
"""
Solana Token Launch Simulator - Command Line Interface

Offline preview of a token launch. Nothing is signed or sent.

- Preview: Validate a token config, revoke authorities, seed a pool, quote a swap
- Networks: List the selectable cluster endpoints
- Metadata: Print the metadata JSON a config would produce

Usage:
    python cli.py preview --name Moon --symbol moon --supply 1000000000
    python cli.py preview --name Moon --symbol MOON --supply 1000000 \\
        --revoke mint --revoke freeze --seed-tokens 500000 --seed-sol 10 \\
        --buy-sol 0.5
    python cli.py preview ... --json     # machine-readable preview
    python cli.py networks
    python cli.py metadata --name Moon --symbol MOON --supply 1000000
"""

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

load_dotenv()

from launchpad.config.settings import NETWORKS, SimulatorSettings
from launchpad.errors import SimulatorError, ValidationError
from launchpad.mint.metadata import metadata_json
from launchpad.mint.models import Authority
from launchpad.pool.models import SwapDirection
from launchpad.preview.models import Preview
from launchpad.session import SimulationSession
from launchpad.units import SOL_DECIMALS, from_base_units, to_base_units

logger = logging.getLogger(__name__)


class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def color(text: str, c: str) -> str:
    """Apply color to text."""
    return f"{c}{text}{Colors.ENDC}"


def raw_config(args: argparse.Namespace) -> dict:
    """Collect raw token input from CLI flags."""
    socials = {}
    for entry in args.social or []:
        label, _, url = entry.partition("=")
        socials[label] = url
    return {
        "name": args.name,
        "symbol": args.symbol,
        "description": args.description,
        "decimals": args.decimals,
        "supply": args.supply,
        "logo_uri": args.logo,
        "socials": socials,
    }


def print_validation_error(error: ValidationError) -> None:
    print(color("\n[!!] Invalid token configuration", Colors.RED + Colors.BOLD))
    for violation in error.violations:
        print(f"  {violation.field:<10} {violation.message}")
    print()


def print_preview(preview: Preview) -> None:
    """Render a preview as colored text."""
    cfg = preview.config
    print(color("\n===========================================", Colors.CYAN))
    print(color(f"  LAUNCH PREVIEW - {cfg.name} ({cfg.symbol})", Colors.BOLD))
    print(color("===========================================\n", Colors.CYAN))

    print(f"  Network:         {preview.network}")
    print(f"  Decimals:        {cfg.decimals}")
    print(f"  Total Supply:    {cfg.supply:,} {cfg.symbol}")
    print(f"  Base Units:      {cfg.base_unit_supply:,}")
    if cfg.description:
        print(f"  Description:     {cfg.description}")
    if cfg.logo_uri:
        print(f"  Logo:            {cfg.logo_uri}")
    for label, url in cfg.socials.items():
        print(f"  {label + ':':<16} {url}")

    print(color("\n  === Authorities ===", Colors.YELLOW))
    for authority in Authority:
        if preview.authority.is_enabled(authority):
            state = color("[RETAINED]", Colors.YELLOW)
        else:
            state = color("[REVOKED]", Colors.GREEN)
        print(f"  {authority.value.capitalize():<16} {state}")

    fee = preview.fee
    print(color("\n  === Estimated Launch Cost ===", Colors.YELLOW))
    print(f"  Lamports:        {fee.lamports:,}")
    print(f"  SOL:             {fee.native_fee}")
    print(f"  {fee.fiat_currency + ':':<16} {fee.fiat_fee}  (at {fee.exchange_rate} {fee.fiat_currency}/SOL)")

    if preview.pool:
        pool = preview.pool
        print(color("\n  === Liquidity Pool ===", Colors.YELLOW))
        print(f"  Reserves:        {pool.display_reserve_a} {cfg.symbol} / {pool.display_reserve_b} SOL")
        print(f"  Price:           {pool.spot_price_a_in_b:.12f} SOL per {cfg.symbol}")

    if preview.swap:
        swap = preview.swap
        after = swap.pool_after
        if swap.direction == SwapDirection.B_TO_A:
            paid = f"{from_base_units(swap.amount_in, SOL_DECIMALS)} SOL"
            got = f"{from_base_units(swap.amount_out, cfg.decimals)} {cfg.symbol}"
        else:
            paid = f"{from_base_units(swap.amount_in, cfg.decimals)} {cfg.symbol}"
            got = f"{from_base_units(swap.amount_out, SOL_DECIMALS)} SOL"
        impact_color = Colors.RED if swap.price_impact > Decimal("0.05") else Colors.GREEN
        print(color("\n  === Swap Preview ===", Colors.YELLOW))
        print(f"  Pay:             {paid}")
        print(f"  Receive:         {got}")
        print(f"  Price Impact:    {color(f'{swap.price_impact:.4%}', impact_color)}")
        print(f"  Price After:     {after.spot_price_a_in_b:.12f} SOL per {cfg.symbol}")

    if preview.indicators:
        print(color("\n  === Holder Warnings ===", Colors.YELLOW))
        for indicator in preview.indicators:
            print(f"  [!] {indicator.value}")

    print(color("\n===========================================\n", Colors.CYAN))


def cmd_preview(args, settings: SimulatorSettings) -> int:
    """Build and print a launch preview."""
    session = SimulationSession(settings)

    try:
        config = session.configure(raw_config(args))

        for authority in args.revoke or []:
            session.revoke(Authority(authority))

        if args.seed_tokens is not None and args.seed_sol is not None:
            session.seed_pool(args.seed_tokens, args.seed_sol)

            if args.buy_sol is not None:
                session.swap(to_base_units(args.buy_sol, SOL_DECIMALS), SwapDirection.B_TO_A, args.fee_bps)
            elif args.sell_tokens is not None:
                session.swap(to_base_units(args.sell_tokens, config.decimals), SwapDirection.A_TO_B, args.fee_bps)

        preview = session.preview(
            network_fee_lamports=args.fee_lamports,
            exchange_rate=args.rate,
        )
    except ValidationError as e:
        logger.debug(f"Preview rejected: {e}")
        print_validation_error(e)
        return 1
    except SimulatorError as e:
        logger.warning(f"Preview failed: {type(e).__name__}: {e}")
        print(color(f"\n[!!] {e}\n", Colors.RED))
        return 1
    except InvalidOperation:
        logger.warning("Preview failed: non-numeric swap amount")
        print(color("\n[!!] Swap amounts must be numbers\n", Colors.RED))
        return 1

    if args.json:
        print(preview.to_json())
    else:
        print_preview(preview)
    return 0


def cmd_networks(args, settings: SimulatorSettings) -> int:
    """List selectable networks."""
    current = settings.network_profile
    for name, url in NETWORKS.items():
        marker = color("*", Colors.GREEN) if name == current.name else " "
        print(f" {marker} {name:<14} {url}")
    if current.name == "custom":
        print(f" {color('*', Colors.GREEN)} {'custom':<14} {current.rpc_url}")
    return 0


def cmd_metadata(args, settings: SimulatorSettings) -> int:
    """Print the metadata document for a config."""
    session = SimulationSession(settings)
    try:
        config = session.configure(raw_config(args))
    except ValidationError as e:
        logger.debug(f"Metadata rejected: {e}")
        print_validation_error(e)
        return 1
    print(metadata_json(config))
    return 0


def add_token_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", required=True, help="Token name (max 32 chars)")
    parser.add_argument("--symbol", required=True, help="Token symbol (max 10 chars)")
    parser.add_argument("--supply", required=True, help="Total supply in whole tokens")
    parser.add_argument("--decimals", help="Decimals 0-9 (default 9)")
    parser.add_argument("--description", help="Token description")
    parser.add_argument("--logo", help="Logo / metadata URI")
    parser.add_argument("--social", action="append", metavar="LABEL=URL", help="Social link (repeatable)")


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Solana Token Launch Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--network", help="mainnet-beta, devnet or testnet")
    parser.add_argument("--rpc-url", help="Custom RPC URL (display only)")
    parser.add_argument("--verbose", action="store_true")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Preview a token launch")
    add_token_arguments(preview_parser)
    preview_parser.add_argument(
        "--revoke", action="append", choices=[a.value for a in Authority],
        help="Authority to revoke (repeatable)",
    )
    preview_parser.add_argument("--seed-tokens", help="Tokens to seed the pool with")
    preview_parser.add_argument("--seed-sol", help="SOL to seed the pool with")
    preview_parser.add_argument("--buy-sol", help="Preview buying with this much SOL")
    preview_parser.add_argument("--sell-tokens", help="Preview selling this many tokens")
    preview_parser.add_argument("--fee-bps", type=int, help="Pool swap fee in bps")
    preview_parser.add_argument("--fee-lamports", type=int, help="Network fee to price instead of the launch plan")
    preview_parser.add_argument("--rate", help="Fiat per SOL (default from SIM_EXCHANGE_RATE)")
    preview_parser.add_argument("--json", action="store_true", help="Print JSON")

    # Networks command
    subparsers.add_parser("networks", help="List cluster endpoints")

    # Metadata command
    metadata_parser = subparsers.add_parser("metadata", help="Print metadata JSON")
    add_token_arguments(metadata_parser)

    args = parser.parse_args(argv)

    settings = SimulatorSettings()
    if args.network:
        settings.network = args.network
    if args.rpc_url:
        settings.rpc_url = args.rpc_url

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    # Route to command handler
    handlers = {
        "preview": cmd_preview,
        "networks": cmd_networks,
        "metadata": cmd_metadata,
    }

    return handlers[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
