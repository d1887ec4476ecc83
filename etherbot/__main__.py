"""
EtherBot CLI entry point.

Provides command-line interface for running the bot and utility commands.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from etherbot import __version__
from etherbot.bot.formatting import (
    ERC20_MAX_RESULTS,
    ERC20_MIN_RESULTS,
    format_balance,
    format_balances,
    format_transfer,
)
from etherbot.config.logging import get_logger, setup_logging
from etherbot.config.settings import Settings, load_settings
from etherbot.explorer import EtherscanClient, ExplorerError, Sort, Tag


def _max_results(value: str) -> int:
    count = int(value)
    if not ERC20_MIN_RESULTS <= count <= ERC20_MAX_RESULTS:
        raise argparse.ArgumentTypeError(
            f"must be between {ERC20_MIN_RESULTS} and {ERC20_MAX_RESULTS}"
        )
    return count


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="etherbot",
        description="Discord bot for Ethereum balance and ERC-20 transfer lookups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"EtherBot {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("run", help="Run the Discord bot")
    subparsers.add_parser("config", help="Show current configuration")

    balance_parser = subparsers.add_parser(
        "balance",
        help="Look up balances in wei (same output as ~balance)",
    )
    balance_parser.add_argument(
        "addresses",
        nargs="+",
        metavar="ADDRESS",
        help="One or more addresses; several are fetched in one batched call",
    )

    erc20_parser = subparsers.add_parser(
        "erc20",
        help="List recent ERC-20 transfers (same output as ~erc20)",
    )
    erc20_parser.add_argument("contract_address", help="Token contract address")
    erc20_parser.add_argument("address", help="Holder address")
    erc20_parser.add_argument(
        "--max-results",
        type=_max_results,
        default=ERC20_MAX_RESULTS,
        help=f"Number of transfers, {ERC20_MIN_RESULTS}-{ERC20_MAX_RESULTS} (default: {ERC20_MAX_RESULTS})",
    )

    return parser


def _make_client(settings: Settings) -> EtherscanClient:
    return EtherscanClient(
        api_key=settings.explorer.api_key,
        network=settings.explorer.network,
        base_url=settings.explorer.base_url,
        timeout=settings.explorer.timeout,
    )


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== EtherBot Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Name: {settings.bot.name}")
    logger.info(f"Command Prefix: {settings.bot.command_prefix}")
    logger.info(f"Bot Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"\nExplorer Network: {settings.explorer.network.value} "
                f"(chainid {settings.explorer.network.chain_id})")
    logger.info(f"Explorer URL: {settings.explorer.base_url}")
    logger.info(f"Explorer Timeout: {settings.explorer.timeout}s")
    logger.info(f"Explorer API Key: {'Set' if settings.explorer.api_key else 'Not set'}")

    return 0


def _require_api_key(settings: Settings) -> bool:
    if not settings.explorer.api_key:
        get_logger(__name__).error(
            "Etherscan API key not set. Add EXPLORER__API_KEY=<your-key> to your .env file."
        )
        return False
    return True


def cmd_run(settings: Settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    if not settings.bot.token:
        logger.error(
            "Discord bot token not set. Add BOT__TOKEN=<your-token> to your .env file."
        )
        return 1

    if not _require_api_key(settings):
        return 1

    from etherbot.bot import EtherBot

    bot = EtherBot(settings)
    logger.info(f"Starting {settings.bot.name} (prefix {settings.bot.command_prefix!r})...")
    # log_handler=None: disable discord.py's default logging setup and use ours
    bot.run(settings.bot.token, log_handler=None)
    return 0


async def cmd_balance(args, settings: Settings) -> int:
    """Print the balance of one address, or a JSON list for several."""
    logger = get_logger(__name__)

    if not _require_api_key(settings):
        return 1

    try:
        async with _make_client(settings) as client:
            if len(args.addresses) == 1:
                print(format_balance(await client.balance(args.addresses[0], Tag.LATEST)))
            else:
                print(format_balances(await client.balances(args.addresses, Tag.LATEST)))
    except (ExplorerError, ValueError) as e:
        logger.error(f"Balance lookup failed: {e}")
        return 1

    return 0


async def cmd_erc20(args, settings: Settings) -> int:
    """Print the most recent ERC-20 transfers, one JSON block each."""
    logger = get_logger(__name__)

    if not _require_api_key(settings):
        return 1

    try:
        async with _make_client(settings) as client:
            transfers = await client.erc20_transfers(
                args.contract_address,
                args.address,
                page=1,
                offset=args.max_results,
                sort=Sort.DESC,
            )
    except ExplorerError as e:
        logger.error(f"Transfer lookup failed: {e}")
        return 1

    if not transfers:
        print("No transfers found.")
    for transfer in transfers:
        print(format_transfer(transfer))

    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "balance":
        return asyncio.run(cmd_balance(args, settings))
    elif args.command == "erc20":
        return asyncio.run(cmd_erc20(args, settings))
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
