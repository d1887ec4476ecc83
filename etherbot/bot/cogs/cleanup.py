"""
CleanupCog - ~clean_channel prefix command.

Walks the invoking channel's history and deletes every message the bot
wrote plus every message that looks like a bot command (starts with the
command prefix). Everything else is left alone.

Errors on individual items do not stop the sweep: a failed history fetch
or a failed delete is recorded in the CleanupReport and the loop moves on
to the next item; after a failed fetch the history is reopened from the
last message seen. Nothing is sent back to the channel, so running the
command again on a cleaned channel deletes nothing.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Callable

import discord
from discord.ext import commands
from pydantic import BaseModel, Field

from etherbot.config.logging import get_logger

logger = get_logger(__name__)


class SkippedItem(BaseModel):
    """A history entry the sweep could not process."""

    message_id: int | None = Field(
        None, description="Message ID, or None when the message itself could not be fetched"
    )
    reason: str = Field(description="Error text")


class CleanupReport(BaseModel):
    """Outcome of one channel sweep."""

    deleted: int = 0
    kept: int = 0
    skipped: list[SkippedItem] = Field(default_factory=list)


# History opener: given a cursor (None for the newest message), returns an
# iterator over the messages older than it, newest first.
HistoryOpener = Callable[[discord.abc.Snowflake | None], AsyncIterable[discord.Message]]

# Consecutive fetch failures at the same position before the sweep gives up
MAX_FETCH_FAILURES = 3


async def clean_messages(
    open_history: HistoryOpener,
    *,
    own_user_id: int,
    prefix: str,
    max_fetch_failures: int = MAX_FETCH_FAILURES,
) -> CleanupReport:
    """
    Delete own and prefixed messages from a channel's history, one at a time.

    discord.py's history iterator is finished once it raises, so after a
    fetch error the history is reopened just before the last message seen
    and the sweep carries on from there.

    Args:
        open_history: Returns the history older than the given cursor
        own_user_id: The bot's user ID
        prefix: Command prefix marking stray command invocations
        max_fetch_failures: Consecutive fetch errors without progress
                            after which the sweep stops

    Returns:
        Counts of deleted and kept messages plus the skipped items
    """
    if not prefix:
        raise ValueError("prefix must be non-empty, otherwise every message matches")

    report = CleanupReport()
    last_seen: discord.abc.Snowflake | None = None
    failures = 0
    history = aiter(open_history(None))

    while True:
        try:
            message = await anext(history)
        except StopAsyncIteration:
            break
        except discord.HTTPException as e:
            logger.warning(f"Skipping history entry that failed to fetch: {e}")
            report.skipped.append(SkippedItem(reason=str(e)))
            failures += 1
            if failures >= max_fetch_failures:
                logger.warning(f"Giving up after {failures} consecutive fetch errors")
                break
            history = aiter(open_history(last_seen))
            continue

        failures = 0
        last_seen = discord.Object(id=message.id)

        if message.author.id != own_user_id and not message.content.startswith(prefix):
            report.kept += 1
            continue

        try:
            await message.delete()
        except discord.HTTPException as e:
            logger.warning(f"Could not delete message {message.id}: {e}")
            report.skipped.append(SkippedItem(message_id=message.id, reason=str(e)))
            continue
        report.deleted += 1

    return report


class CleanupCog(commands.Cog):
    """Removes bot output and command invocations from a channel."""

    def __init__(self, bot, prefix: str) -> None:
        self.bot = bot
        self.prefix = prefix

    @commands.command(name="clean_channel")
    async def clean_channel(self, ctx: commands.Context) -> None:
        """
        ~clean_channel

        Deletes this bot's messages and every message starting with the
        command prefix from the current channel, including the invocation
        itself. Runs until the whole history has been visited.
        """
        logger.info(f"Cleaning channel {ctx.channel.id} (requested by {ctx.author})")
        report = await clean_messages(
            lambda before: ctx.channel.history(limit=None, before=before),
            own_user_id=self.bot.user.id,
            prefix=self.prefix,
        )
        logger.info(
            f"Channel {ctx.channel.id} cleaned: {report.deleted} deleted, "
            f"{report.kept} kept, {len(report.skipped)} skipped"
        )
