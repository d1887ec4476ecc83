"""
Blockchain Explorer Layer.

Async client for the Etherscan API and the result models it returns.
Cogs depend on the ExplorerClient interface; EtherscanClient is the
HTTP implementation built at startup.
"""

from etherbot.explorer.base import ExplorerClient
from etherbot.explorer.etherscan import EtherscanClient
from etherbot.explorer.models import (
    AccountBalance,
    ExplorerError,
    Network,
    Sort,
    Tag,
    TokenTransfer,
)

__all__ = [
    "ExplorerClient",
    "EtherscanClient",
    "AccountBalance",
    "ExplorerError",
    "Network",
    "Sort",
    "Tag",
    "TokenTransfer",
]
