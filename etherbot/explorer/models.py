"""
Data structures for Etherscan responses and request modifiers.

- Network: chain selection, fixed for the lifetime of a client
- Tag / Sort: request modifiers passed through to the API
- AccountBalance: one entry of a multi-address balance lookup
- TokenTransfer: one ERC-20 transfer event record
- ExplorerError: raised for any failed explorer call
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Network(str, Enum):
    """Chains reachable through the Etherscan V2 API."""

    MAINNET = "mainnet"
    SEPOLIA = "sepolia"
    HOLESKY = "holesky"

    @property
    def chain_id(self) -> int:
        return _CHAIN_IDS[self]


_CHAIN_IDS = {
    Network.MAINNET: 1,
    Network.SEPOLIA: 11155111,
    Network.HOLESKY: 17000,
}


class Tag(str, Enum):
    """Block tag for state queries."""

    LATEST = "latest"
    EARLIEST = "earliest"
    PENDING = "pending"


class Sort(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ExplorerError(Exception):
    """Raised when an explorer call fails at the transport or API level."""

    def __init__(self, message: str, *, action: str | None = None, detail: str | None = None):
        self.action = action
        self.detail = detail
        text = message
        if action:
            text = f"{action}: {text}"
        if detail:
            text = f"{text} ({detail})"
        super().__init__(text)


class AccountBalance(BaseModel):
    """Balance of a single account, in wei."""

    account: str = Field(description="Queried address as echoed by the API")
    balance: int = Field(ge=0, description="Balance in wei")


class TokenTransfer(BaseModel):
    """
    A single ERC-20 Transfer event as returned by ``module=account&action=tokentx``.

    Etherscan reports every numeric field as a decimal string; they are kept
    as strings so the record serialises back exactly as received. Field names
    follow the API (``from`` is exposed as ``from_address``).
    """

    block_number: str = Field(alias="blockNumber")
    time_stamp: str = Field(alias="timeStamp")
    hash: str
    nonce: str | None = None
    block_hash: str | None = Field(None, alias="blockHash")
    from_address: str = Field(alias="from")
    contract_address: str = Field(alias="contractAddress")
    to: str
    value: str
    token_name: str | None = Field(None, alias="tokenName")
    token_symbol: str | None = Field(None, alias="tokenSymbol")
    token_decimal: str | None = Field(None, alias="tokenDecimal")
    transaction_index: str | None = Field(None, alias="transactionIndex")
    gas: str | None = None
    gas_price: str | None = Field(None, alias="gasPrice")
    gas_used: str | None = Field(None, alias="gasUsed")
    cumulative_gas_used: str | None = Field(None, alias="cumulativeGasUsed")
    input: str | None = None
    confirmations: str | None = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_api_dict(self) -> dict:
        """Dump with the API's field names, preserving any extra fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
