"""Configuration module."""

from wren_cli.config.settings import Settings, get_settings
from wren_cli.config.store import CLIConfig, config_path, mask_secret

__all__ = ["Settings", "get_settings", "CLIConfig", "config_path", "mask_secret"]
