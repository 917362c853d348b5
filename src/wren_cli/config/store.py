"""Persisted CLI configuration (~/.wren/config.yaml)."""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from wren_cli.config.settings import get_settings
from wren_cli.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".wren"
CONFIG_FILE_NAME = "config.yaml"

# Accepted spellings for each field; the dashed form is what users type.
CONFIG_KEYS: dict[str, str] = {
    "endpoint": "endpoint",
    "api-key": "api_key",
    "api_key": "api_key",
    "project-id": "project_id",
    "project_id": "project_id",
}
VALID_KEYS_HINT = "endpoint, api-key, project-id"


def config_path() -> Path:
    """Return the full path of the config file."""
    settings = get_settings()
    if settings.config_dir is not None:
        return Path(settings.config_dir) / CONFIG_FILE_NAME
    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigError(f"cannot determine home directory: {e}") from e
    return home / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def mask_secret(secret: str) -> str:
    """Mask a credential for display; long keys keep 12 leading and 4 trailing chars."""
    if not secret:
        return ""
    if len(secret) > 16:
        return f"{secret[:12]}...{secret[-4:]}"
    return "****"


class CLIConfig(BaseModel):
    """Endpoint, credential and active project, persisted between invocations."""

    endpoint: str = Field(default="", description="Server endpoint URL")
    api_key: str = Field(default="", description="Organization or project API key")
    project_id: str = Field(default="", description="Active project ID")

    @classmethod
    def load(cls, path: Path | None = None) -> "CLIConfig":
        """Read the config file; a missing file yields an empty config."""
        path = path or config_path()
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No config file at %s", path)
            return cls()
        except OSError as e:
            raise ConfigError(f"reading config: {e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"parsing config: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"parsing config: expected a mapping in {path}")

        # YAML may hand back ints for project_id
        data = {k: "" if v is None else str(v) for k, v in data.items()}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"parsing config: {e}") from e

    def save(self, path: Path | None = None) -> Path:
        """Write the config, creating the directory with owner-only permissions."""
        path = path or config_path()
        try:
            path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            content = yaml.safe_dump(
                self.model_dump(exclude_defaults=True), default_flow_style=False, sort_keys=False
            )
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.chmod(path, 0o600)
        except OSError as e:
            raise ConfigError(f"writing config: {e}") from e
        logger.debug("Saved config to %s", path)
        return path

    @staticmethod
    def _field_for(key: str) -> str:
        try:
            return CONFIG_KEYS[key]
        except KeyError:
            raise ConfigError(
                f'unknown config key: "{key}" (valid keys: {VALID_KEYS_HINT})'
            ) from None

    def get(self, key: str) -> str:
        """Return the value stored under a config key."""
        return getattr(self, self._field_for(key))

    def set(self, key: str, value: str) -> None:
        """Update a single config key."""
        setattr(self, self._field_for(key), value)

    def display(self) -> dict[str, str]:
        """Return all fields for display, with the API key masked."""
        return {
            "endpoint": self.endpoint,
            "api_key": mask_secret(self.api_key),
            "project_id": self.project_id,
        }
