"""
EtherBot - discord.py bot client.

Manages the full bot lifecycle:
- Opens the shared Etherscan client once at startup
- Loads command cogs (ExplorerCog, CleanupCog), injecting the client
- Logs command failures (the only failure path; nothing is replied)
- Closes the HTTP session on shutdown via AsyncExitStack
"""

from __future__ import annotations

from contextlib import AsyncExitStack

import discord
from discord.ext import commands

from etherbot.config.logging import get_logger
from etherbot.config.settings import Settings
from etherbot.explorer import EtherscanClient, ExplorerClient

logger = get_logger(__name__)


class EtherBot(commands.Bot):
    """
    Discord bot for Etherscan lookups.

    Holds the shared ExplorerClient and hands it to the cogs that need it.
    The client is created in setup_hook and never replaced afterwards, so
    concurrently running commands only ever read it.

    Args:
        settings: Full application settings (bot token and prefix, explorer config)
    """

    def __init__(self, settings: Settings) -> None:
        intents = discord.Intents.default()
        intents.message_content = True  # Required to read prefix commands
        super().__init__(
            command_prefix=settings.bot.command_prefix,
            intents=intents,
            help_command=None,
        )
        self.settings = settings
        self.explorer: ExplorerClient | None = None
        self._exit_stack = AsyncExitStack()

    async def setup_hook(self) -> None:
        """
        Called after login, before connecting to the Gateway.

        Opens the explorer client and loads the cogs.
        """
        explorer_settings = self.settings.explorer
        logger.info(f"Initializing Etherscan client (network: {explorer_settings.network.value})...")
        client = EtherscanClient(
            api_key=explorer_settings.api_key,
            network=explorer_settings.network,
            base_url=explorer_settings.base_url,
            timeout=explorer_settings.timeout,
        )
        self.explorer = await self._exit_stack.enter_async_context(client)
        logger.info("Etherscan client ready")

        from etherbot.bot.cogs.cleanup import CleanupCog
        from etherbot.bot.cogs.explorer import ExplorerCog
        await self.add_cog(ExplorerCog(self, self.explorer))
        await self.add_cog(CleanupCog(self, self.settings.bot.command_prefix))
        logger.info("Cogs loaded")

    async def on_ready(self) -> None:
        """Called when the bot successfully connects to Discord."""
        logger.info(f"Logged in as {self.user} (id: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError) -> None:
        """
        Log a failed command. No reply is sent to the channel.

        Unknown commands are expected noise on a shared prefix, bad input is
        the user's problem, everything else (explorer failures included)
        is logged with its traceback.
        """
        command = ctx.command.qualified_name if ctx.command else ctx.invoked_with
        if isinstance(error, commands.CommandNotFound):
            logger.debug(f"Unknown command: {ctx.invoked_with!r}")
        elif isinstance(error, commands.UserInputError):
            logger.info(f"Bad input for {command!r} from {ctx.author}: {error}")
        else:
            original = getattr(error, "original", error)
            logger.error(
                f"Command {command!r} failed: {original}",
                exc_info=(type(original), original, original.__traceback__),
            )

    async def close(self) -> None:
        """Graceful shutdown - close the explorer client before disconnecting."""
        logger.info("Shutting down EtherBot...")
        await self._exit_stack.aclose()
        await super().close()
