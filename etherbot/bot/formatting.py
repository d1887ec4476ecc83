"""
Reply text builders shared by the cogs and the CLI.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from etherbot.explorer.models import AccountBalance, TokenTransfer

ERC20_MIN_RESULTS = 1
ERC20_MAX_RESULTS = 10

# Stand-in for an unparseable max_results argument. Always outside the
# accepted range, so it surfaces as the range error.
ERC20_INVALID_RESULTS = 999


def json_block(payload: Any) -> str:
    """Wrap a pretty-printed JSON value in a fenced ```json code block."""
    return f"```json\n{json.dumps(payload, indent=2)}\n```"


def format_balance(wei: int) -> str:
    return f"Balance: {wei} Wei"


def format_balances(balances: Iterable[AccountBalance]) -> str:
    return json_block([b.model_dump() for b in balances])


def format_transfer(transfer: TokenTransfer) -> str:
    return json_block(transfer.to_api_dict())


def balance_usage(prefix: str) -> str:
    return f"Please specify an address: `{prefix}balance <address>`"


def erc20_usage(prefix: str) -> str:
    return f"Incorrect command: `{prefix}erc20 <contract_address> <address> <max_results>`"


def erc20_range_error() -> str:
    return f"Max results should be a number from {ERC20_MIN_RESULTS} to {ERC20_MAX_RESULTS}"


def parse_max_results(raw: str) -> int:
    """
    Parse an unsigned integer, falling back to ERC20_INVALID_RESULTS.

    Accepts ASCII digits with an optional leading '+'. Signs, whitespace,
    decimals and anything else count as unparseable.
    """
    digits = raw[1:] if raw.startswith("+") else raw
    if not digits or not (digits.isascii() and digits.isdigit()):
        return ERC20_INVALID_RESULTS
    return int(digits)


def max_results_in_range(count: int) -> bool:
    return ERC20_MIN_RESULTS <= count <= ERC20_MAX_RESULTS
