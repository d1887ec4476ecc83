"""
Tests for Settings loading.

Settings are built with _env_file=None so a developer's local .env
never leaks into the assertions.
"""

import pytest
from pydantic import ValidationError

from etherbot.config.settings import BotSettings, Settings, load_settings
from etherbot.explorer.models import Network


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "BOT__TOKEN",
        "BOT__COMMAND_PREFIX",
        "EXPLORER__API_KEY",
        "EXPLORER__NETWORK",
        "EXPLORER__TIMEOUT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_prefix_defaults_to_tilde(self):
        """Commands use '~' unless configured otherwise."""
        settings = Settings(_env_file=None)
        assert settings.bot.command_prefix == "~"

    def test_secrets_default_to_empty(self):
        """Token and API key are empty until configured; the CLI rejects that at startup."""
        settings = Settings(_env_file=None)
        assert settings.bot.token == ""
        assert settings.explorer.api_key == ""

    def test_network_defaults_to_mainnet(self):
        settings = Settings(_env_file=None)
        assert settings.explorer.network is Network.MAINNET
        assert settings.explorer.network.chain_id == 1


class TestEnvironmentOverrides:
    def test_nested_variables(self, monkeypatch):
        """BOT__* and EXPLORER__* populate the nested sections."""
        monkeypatch.setenv("BOT__TOKEN", "discord-token")
        monkeypatch.setenv("EXPLORER__API_KEY", "etherscan-key")
        settings = Settings(_env_file=None)
        assert settings.bot.token == "discord-token"
        assert settings.explorer.api_key == "etherscan-key"

    def test_network_from_env(self, monkeypatch):
        monkeypatch.setenv("EXPLORER__NETWORK", "sepolia")
        settings = Settings(_env_file=None)
        assert settings.explorer.network is Network.SEPOLIA
        assert settings.explorer.network.chain_id == 11155111

    def test_unknown_network_rejected(self, monkeypatch):
        monkeypatch.setenv("EXPLORER__NETWORK", "ropsten")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_empty_prefix_rejected(self):
        """An empty prefix would make ~clean_channel match every message."""
        with pytest.raises(ValidationError):
            BotSettings(command_prefix="")


class TestLoadSettings:
    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BOT__TOKEN=from-file\nEXPLORER__NETWORK=holesky\nLOG_LEVEL=DEBUG\n")
        settings = load_settings(env_file=env_file)
        assert settings.bot.token == "from-file"
        assert settings.explorer.network is Network.HOLESKY
        assert settings.log_level == "DEBUG"
