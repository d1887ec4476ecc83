"""
Base class for blockchain explorer clients.

The bot only depends on this interface, so cogs can be exercised against
a mock and the HTTP implementation can be swapped without touching them.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from etherbot.explorer.models import AccountBalance, Network, Sort, Tag, TokenTransfer


class ExplorerClient(ABC):
    """
    Abstract base class for explorer clients.

    A client is bound to a single network for its whole lifetime and is
    shared read-only between concurrently running commands.
    """

    network: Network

    @abstractmethod
    async def initialize(self) -> None:
        """
        Acquire connection resources.

        Raises:
            RuntimeError: If the client was already initialized
        """
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Release connection resources. Safe to call more than once."""
        pass

    @abstractmethod
    async def balance(self, address: str, tag: Tag = Tag.LATEST) -> int:
        """
        Return the balance of one address in wei.

        Raises:
            ExplorerError: If the request or the API call fails
        """
        pass

    @abstractmethod
    async def balances(
        self, addresses: Sequence[str], tag: Tag = Tag.LATEST
    ) -> list[AccountBalance]:
        """
        Return balances for several addresses in one request.

        Results follow the order the API returns them in, which matches
        the order of ``addresses``.

        Raises:
            ValueError: If ``addresses`` is empty or exceeds the per-call limit
            ExplorerError: If the request or the API call fails
        """
        pass

    @abstractmethod
    async def erc20_transfers(
        self,
        contract_address: str,
        address: str,
        page: int = 1,
        offset: int = 10,
        sort: Sort = Sort.DESC,
    ) -> list[TokenTransfer]:
        """
        Return ERC-20 transfer events of ``contract_address`` involving ``address``.

        Args:
            contract_address: Token contract
            address: Holder address
            page: 1-based page number
            offset: Records per page
            sort: Ordering by block number

        Raises:
            ExplorerError: If the request or the API call fails
        """
        pass

    async def __aenter__(self):
        """Context manager entry - initialize the client."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - shutdown the client."""
        await self.shutdown()
        return False
