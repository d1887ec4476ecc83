"""
Application settings and configuration management.

Uses Pydantic Settings for validation and environment variable support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from etherbot.explorer.models import Network


class BotSettings(BaseSettings):
    """Discord bot configuration."""

    name: str = Field(default="EtherBot", description="Bot display name")
    command_prefix: str = Field(
        default="~",
        min_length=1,
        description="Command prefix. Messages starting with it are also removed by ~clean_channel.",
    )
    token: str = Field(default="", description="Discord bot token")

    model_config = SettingsConfigDict(env_prefix="BOT_")


class ExplorerSettings(BaseSettings):
    """Etherscan API configuration."""

    api_key: str = Field(default="", description="Etherscan API key")
    network: Network = Field(
        default=Network.MAINNET,
        description="Chain queried by every command. Fixed at startup.",
    )
    base_url: str = Field(
        default="https://api.etherscan.io/v2/api",
        description="Etherscan V2 endpoint; the chain is selected with the chainid parameter",
    )
    timeout: float = Field(default=10.0, gt=0, description="Total request timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="EXPLORER_")


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development", description="Deployment environment"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_file: Path | None = Field(default=None, description="Log file path")

    # Sub-configurations
    bot: BotSettings = Field(default_factory=BotSettings)
    explorer: ExplorerSettings = Field(default_factory=ExplorerSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load settings from file and environment.

    Args:
        env_file: Path to .env file (optional)

    Returns:
        Loaded settings instance
    """
    if env_file:
        return Settings(_env_file=env_file)
    return Settings()
