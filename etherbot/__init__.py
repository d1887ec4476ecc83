"""
EtherBot - Discord bot for Ethereum balance and ERC-20 transfer lookups.

Relays chat commands to the Etherscan API and formats the results back
into Discord messages.
"""

__version__ = "0.1.0"
