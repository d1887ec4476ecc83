"""
Discord Bot Layer.

Command dispatch, reply formatting and lifecycle management for EtherBot.
"""

from etherbot.bot.client import EtherBot

__all__ = ["EtherBot"]
