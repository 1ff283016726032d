"""
User settings for droidplan.

Settings are loaded from multiple sources:
1. Environment variables (highest precedence)
2. Command-line provided config file
3. ``droidplan.yaml`` in the current directory
4. The user's XDG config directory
5. Default values (lowest precedence)
"""

import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from droidplan.core.errors import ConfigError
from droidplan.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

ENV_PREFIX = "DROIDPLAN_"


class DroidplanSettings(BaseSettings):
    """Settings with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables
    2. Constructor arguments (file data)
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Return sources in priority order: env > init > dotenv > file_secret."""
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    log_level: str = Field(default="WARNING", description="Minimum log level")
    log_file: Path | None = Field(default=None, description="JSON log file")
    json_logs: bool = Field(default=False, description="Render console logs as JSON")

    sdk_info_paths: Annotated[list[Path], NoDecode] = Field(
        default_factory=list,
        description="YAML or .properties files answering symbolic SDK references",
    )
    signing_config_path: Path | None = Field(
        default=None, description="YAML file declaring signing configs"
    )
    include_debug_signing: bool = Field(
        default=True, description="Register the Android debug signing identity"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v

    @field_validator("sdk_info_paths", mode="before")
    @classmethod
    def decode_sdk_info_paths(cls, v: Any) -> list[Path]:
        if isinstance(v, str):
            return [Path(path.strip()) for path in v.split(",") if path.strip()]
        elif isinstance(v, list):
            return [Path(str(path).strip()) for path in v if str(path).strip()]
        return []


def default_config_paths(cli_config_path: str | Path | None = None) -> list[Path]:
    """Generate a list of config paths to search in order of precedence."""
    config_paths = []

    if cli_config_path:
        config_paths.append(Path(cli_config_path).expanduser().resolve())

    config_paths.extend([Path.cwd() / "droidplan.yaml", Path.cwd() / ".droidplan.yml"])

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    config_home = (
        Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    )
    config_paths.extend(
        [config_home / "droidplan" / "config.yaml", config_home / "droidplan" / "config.yml"]
    )
    return config_paths


def load_settings(cli_config_path: str | Path | None = None) -> DroidplanSettings:
    """Load settings from the first config file found plus the environment.

    A config path given explicitly must exist.

    Raises:
        ConfigError: If a config file is missing, unreadable or invalid
    """
    if cli_config_path and not Path(cli_config_path).expanduser().is_file():
        raise ConfigError(f"Config file not found: {cli_config_path}")

    for path in default_config_paths(cli_config_path):
        if not path.is_file():
            continue
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {path} must contain a mapping")
            settings = DroidplanSettings(**data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ConfigError(f"Failed to load config file {path}: {e}") from e
        logger.debug("settings_loaded", path=str(path))
        return settings

    logger.debug("settings_defaults_used")
    try:
        return DroidplanSettings()
    except ValidationError as e:
        raise ConfigError(f"Invalid settings from environment: {e}") from e
