"""Runtime settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wren_cli.core.exceptions import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Runtime configuration read from WREN_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WREN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Location of the persisted CLI config (defaults to ~/.wren)
    config_dir: Path | None = Field(default=None, description="Directory holding config.yaml")

    # HTTP timeouts, in seconds
    request_timeout: float = Field(default=30.0, description="Timeout for metadata requests")
    login_timeout: float = Field(default=15.0, description="Timeout for credential validation")
    ai_timeout: float = Field(
        default=240.0, description="Timeout for a single AI pipeline call (ask, sql, summary, chart)"
    )

    default_endpoint: str = Field(
        default="https://localhost:3000", description="Endpoint offered by the login prompt"
    )

    log_level: LogLevel = Field(default="WARNING", description="Log level when --verbose is not given")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Raises:
        ConfigError: If a WREN_* variable holds an invalid value
    """
    try:
        return Settings()
    except ValidationError as e:
        problems = "; ".join(
            f"WREN_{'_'.join(str(part) for part in err['loc']).upper()}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"invalid environment settings: {problems}") from e
