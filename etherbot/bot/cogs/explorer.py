"""
ExplorerCog - ~balance and ~erc20 prefix commands.

Both commands validate their arguments locally, make at most one call to
the shared ExplorerClient, and send the formatted result back to the
channel. Explorer failures are not caught here: they propagate to
EtherBot.on_command_error like any other command failure.
"""

from __future__ import annotations

from discord.ext import commands

from etherbot.bot.formatting import (
    balance_usage,
    erc20_range_error,
    erc20_usage,
    format_balance,
    format_balances,
    format_transfer,
    max_results_in_range,
    parse_max_results,
)
from etherbot.config.logging import get_logger
from etherbot.explorer import ExplorerClient, Sort, Tag

logger = get_logger(__name__)


class ExplorerCog(commands.Cog):
    """Balance and ERC-20 transfer lookups."""

    def __init__(self, bot, explorer: ExplorerClient) -> None:
        self.bot = bot
        self.explorer = explorer

    @commands.command(name="balance")
    async def balance(self, ctx: commands.Context, *addresses: str) -> None:
        """
        ~balance <address> [address...]

        One address replies with its balance in wei. Several addresses are
        looked up in a single batched call and replied as a JSON list.
        """
        if not addresses:
            await ctx.send(balance_usage(ctx.clean_prefix))
            return

        if len(addresses) == 1:
            wei = await self.explorer.balance(addresses[0], Tag.LATEST)
            await ctx.send(format_balance(wei))
            return

        logger.debug(f"Batched balance lookup for {len(addresses)} addresses")
        balances = await self.explorer.balances(list(addresses), Tag.LATEST)
        await ctx.send(format_balances(balances))

    @commands.command(name="erc20")
    async def erc20(self, ctx: commands.Context, *args: str) -> None:
        """
        ~erc20 <contract_address> <address> <max_results>

        Replies with the most recent ERC-20 transfers of the token contract
        involving the address, one JSON message per transfer. max_results
        must be between 1 and 10.
        """
        if len(args) != 3:
            await ctx.send(erc20_usage(ctx.clean_prefix))
            return

        contract_address, address, raw_max_results = args
        max_results = parse_max_results(raw_max_results)
        if not max_results_in_range(max_results):
            await ctx.send(erc20_range_error())
            return

        transfers = await self.explorer.erc20_transfers(
            contract_address,
            address,
            page=1,
            offset=max_results,
            sort=Sort.DESC,
        )
        logger.debug(f"erc20 {contract_address} {address}: {len(transfers)} transfer(s)")

        for transfer in transfers:
            await ctx.send(format_transfer(transfer))
