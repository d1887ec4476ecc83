"""
Tests for the etherbot CLI.

Parser shape, missing-secret exit codes, and the offline lookup commands
with the Etherscan client patched out.
"""

import argparse
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from etherbot.__main__ import cmd_balance, cmd_erc20, cmd_run, create_parser
from etherbot.config.settings import Settings
from etherbot.explorer import AccountBalance, ExplorerError, Sort, Tag

ADDRESS_A = "0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe"
ADDRESS_B = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
CONTRACT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"


def _settings(token: str = "token", api_key: str = "key") -> Settings:
    settings = Settings(_env_file=None)
    settings.bot.token = token
    settings.explorer.api_key = api_key
    return settings


def _patched_client():
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.balance = AsyncMock(return_value=5)
    client.balances = AsyncMock(return_value=[])
    client.erc20_transfers = AsyncMock(return_value=[])
    return patch("etherbot.__main__.EtherscanClient", return_value=client), client


class TestParser:
    def test_balance_takes_one_or_more_addresses(self):
        args = create_parser().parse_args(["balance", ADDRESS_A, ADDRESS_B])
        assert args.command == "balance"
        assert args.addresses == [ADDRESS_A, ADDRESS_B]

    def test_balance_requires_an_address(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["balance"])

    def test_erc20_max_results_defaults_to_10(self):
        args = create_parser().parse_args(["erc20", CONTRACT, ADDRESS_A])
        assert args.max_results == 10

    @pytest.mark.parametrize("value", ["0", "11", "x"])
    def test_erc20_max_results_out_of_range(self, value):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["erc20", CONTRACT, ADDRESS_A, "--max-results", value])

    def test_global_options(self):
        args = create_parser().parse_args(["--log-level", "DEBUG", "--env-file", "x.env", "config"])
        assert args.log_level == "DEBUG"
        assert str(args.env_file) == "x.env"
        assert args.command == "config"


class TestRunRequiresSecrets:
    def test_missing_token(self):
        assert cmd_run(_settings(token="")) == 1

    def test_missing_api_key(self):
        assert cmd_run(_settings(api_key="")) == 1

    def test_starts_bot_with_token(self):
        with patch("etherbot.bot.EtherBot") as bot_cls:
            assert cmd_run(_settings(token="abc")) == 0
        bot_cls.return_value.run.assert_called_once_with("abc", log_handler=None)


class TestLookupCommands:
    @pytest.mark.asyncio
    async def test_single_balance_printed(self, capsys):
        patcher, client = _patched_client()
        with patcher:
            code = await cmd_balance(argparse.Namespace(addresses=[ADDRESS_A]), _settings())

        assert code == 0
        client.balance.assert_awaited_once_with(ADDRESS_A, Tag.LATEST)
        assert capsys.readouterr().out.strip() == "Balance: 5 Wei"

    @pytest.mark.asyncio
    async def test_several_balances_printed_as_json(self, capsys):
        patcher, client = _patched_client()
        client.balances.return_value = [AccountBalance(account=ADDRESS_A, balance=1)]
        with patcher:
            code = await cmd_balance(argparse.Namespace(addresses=[ADDRESS_A, ADDRESS_B]), _settings())

        assert code == 0
        client.balances.assert_awaited_once_with([ADDRESS_A, ADDRESS_B], Tag.LATEST)
        assert capsys.readouterr().out.startswith("```json\n")

    @pytest.mark.asyncio
    async def test_explorer_error_exit_code(self):
        patcher, client = _patched_client()
        client.balance.side_effect = ExplorerError("NOTOK")
        with patcher:
            code = await cmd_balance(argparse.Namespace(addresses=[ADDRESS_A]), _settings())
        assert code == 1

    @pytest.mark.asyncio
    async def test_lookup_without_api_key(self):
        patcher, client = _patched_client()
        with patcher as factory:
            code = await cmd_erc20(
                argparse.Namespace(contract_address=CONTRACT, address=ADDRESS_A, max_results=3),
                _settings(api_key=""),
            )
        assert code == 1
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_erc20_request(self, capsys):
        patcher, client = _patched_client()
        with patcher:
            code = await cmd_erc20(
                argparse.Namespace(contract_address=CONTRACT, address=ADDRESS_A, max_results=3),
                _settings(),
            )

        assert code == 0
        client.erc20_transfers.assert_awaited_once_with(
            CONTRACT, ADDRESS_A, page=1, offset=3, sort=Sort.DESC
        )
        assert "No transfers found." in capsys.readouterr().out
