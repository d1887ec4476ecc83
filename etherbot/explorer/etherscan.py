"""
Etherscan API client.

Talks to the Etherscan V2 HTTP API over a single long-lived aiohttp session.
The network is fixed at construction time and sent as ``chainid`` on every
request.

Etherscan wraps every answer in an envelope:

    {"status": "1", "message": "OK", "result": ...}

``status == "0"`` signals an error, with the reason in ``result`` (e.g.
"Invalid API Key"). The one exception is an empty list query, which comes
back as ``status "0"`` / ``message "No transactions found"`` and is treated
as an empty result here.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import aiohttp
from pydantic import ValidationError

from etherbot.explorer.base import ExplorerClient
from etherbot.explorer.models import (
    AccountBalance,
    ExplorerError,
    Network,
    Sort,
    Tag,
    TokenTransfer,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.etherscan.io/v2/api"

# balancemulti accepts at most this many comma-separated addresses. A ~balance
# reply only fits Discord's 2000-character message limit for about 18 of them
# (full-length addresses, 20-digit balances); larger replies fail to send.
MAX_BALANCE_ADDRESSES = 20

_NO_RESULTS_MESSAGES = ("No transactions found", "No records found")


class EtherscanClient(ExplorerClient):
    """
    Etherscan implementation of ExplorerClient.

    Use as an async context manager so the HTTP session is closed:

        async with EtherscanClient(api_key, Network.MAINNET) as client:
            wei = await client.balance("0x...")

    Args:
        api_key: Etherscan API key
        network: Chain to query
        base_url: API endpoint (V2, chain selected via ``chainid``)
        timeout: Total per-request timeout in seconds
        session: Optional externally owned session. It is used as-is and
                 is not closed by shutdown().
    """

    def __init__(
        self,
        api_key: str,
        network: Network = Network.MAINNET,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ):
        self.network = network
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def initialize(self) -> None:
        if not self._owns_session:
            return
        if self._session is not None:
            raise RuntimeError("EtherscanClient is already initialized")
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self._timeout),
            headers={"Accept": "application/json"},
        )
        logger.debug(f"Etherscan session opened ({self.network.value}, chainid={self.network.chain_id})")

    async def shutdown(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("Etherscan session closed")

    # ------------------------------------------------------------------
    # Account queries
    # ------------------------------------------------------------------

    async def balance(self, address: str, tag: Tag = Tag.LATEST) -> int:
        result = await self._call("balance", address=address, tag=tag.value)
        try:
            return int(result)
        except (TypeError, ValueError) as e:
            raise ExplorerError("unexpected balance value", action="balance", detail=repr(result)) from e

    async def balances(
        self, addresses: Sequence[str], tag: Tag = Tag.LATEST
    ) -> list[AccountBalance]:
        if not addresses:
            raise ValueError("At least one address is required")
        if len(addresses) > MAX_BALANCE_ADDRESSES:
            raise ValueError(
                f"Etherscan accepts at most {MAX_BALANCE_ADDRESSES} addresses per call, got {len(addresses)}"
            )

        result = await self._call("balancemulti", address=",".join(addresses), tag=tag.value)
        return self._parse_list(result, AccountBalance, action="balancemulti")

    async def erc20_transfers(
        self,
        contract_address: str,
        address: str,
        page: int = 1,
        offset: int = 10,
        sort: Sort = Sort.DESC,
    ) -> list[TokenTransfer]:
        result = await self._call(
            "tokentx",
            contractaddress=contract_address,
            address=address,
            page=str(page),
            offset=str(offset),
            sort=sort.value,
        )
        return self._parse_list(result, TokenTransfer, action="tokentx")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _call(self, action: str, **params: str) -> Any:
        """
        Perform one ``module=account`` request and return the envelope's ``result``.

        Raises:
            RuntimeError: If the client has not been initialized
            ExplorerError: On HTTP, transport, decoding or API-level failure
        """
        if self._session is None:
            raise RuntimeError("EtherscanClient is not initialized; use 'async with EtherscanClient(...)'")

        query = {
            "chainid": str(self.network.chain_id),
            "module": "account",
            "action": action,
            **params,
            "apikey": self._api_key,
        }
        logger.debug(f"Etherscan request: action={action} params={params}")

        try:
            async with self._session.get(self._base_url, params=query) as response:
                if response.status != 200:
                    raise ExplorerError(
                        f"HTTP {response.status}", action=action, detail=response.reason
                    )
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExplorerError("request failed", action=action, detail=str(e) or type(e).__name__) from e
        except ValueError as e:
            raise ExplorerError("response is not valid JSON", action=action) from e

        if not isinstance(payload, dict) or "result" not in payload:
            raise ExplorerError("unexpected response shape", action=action, detail=repr(payload)[:200])

        if str(payload.get("status")) == "0":
            message = payload.get("message", "")
            if message in _NO_RESULTS_MESSAGES:
                return []
            raise ExplorerError(message or "NOTOK", action=action, detail=str(payload["result"]))

        return payload["result"]

    @staticmethod
    def _parse_list(result: Any, model, *, action: str) -> list:
        if not isinstance(result, list):
            raise ExplorerError("expected a list result", action=action, detail=repr(result)[:200])
        try:
            return [model.model_validate(item) for item in result]
        except ValidationError as e:
            raise ExplorerError("malformed record in result", action=action, detail=str(e)) from e
