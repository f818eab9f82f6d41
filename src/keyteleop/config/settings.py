"""Configuration management for keyteleop.

Loads settings from a YAML configuration file with environment variable
overrides for the controller gains. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/keyteleop.yaml")


class TeleopConfig(BaseModel):
    scale_linear: float = Field(default=2.0, allow_inf_nan=False)
    scale_angular: float = Field(default=2.0, allow_inf_nan=False)


class SpawnConfig(BaseModel):
    x_max: float = Field(default=11.0, gt=0, description="Spawn x is drawn from [0, x_max]")
    y_max: float = Field(default=11.0, gt=0, description="Spawn y is drawn from [0, y_max]")
    theta_max: float = Field(default=3.14, gt=0, description="Spawn heading is drawn from [0, theta_max]")


class SimulatorConfig(BaseModel):
    base_url: str = Field(default="http://localhost:8090")
    timeout: float = Field(default=2.0, gt=0)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8090, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the keyteleop system.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.

    Values passed to the constructor (the parsed YAML) rank below
    ``KEYTELEOP_*`` variables, so e.g. ``KEYTELEOP_SIMULATOR__BASE_URL``
    replaces only that one key of the file's ``simulator`` section.
    """

    model_config = {
        "env_prefix": "KEYTELEOP_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    teleop: TeleopConfig = Field(default_factory=TeleopConfig)
    spawn: SpawnConfig = Field(default_factory=SpawnConfig)
    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: KEYTELEOP_* env vars > .env file > bare SCALE_* vars > YAML
    file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    # Load .env file manually for non-prefixed vars
    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply the bare ``SCALE_LINEAR`` / ``SCALE_ANGULAR`` parameters."""
    scale_linear = os.environ.get("SCALE_LINEAR", "")
    scale_angular = os.environ.get("SCALE_ANGULAR", "")

    if not scale_linear and not scale_angular:
        return

    if not isinstance(yaml_data.get("teleop"), dict):
        yaml_data["teleop"] = {}

    if scale_linear:
        yaml_data["teleop"]["scale_linear"] = scale_linear
    if scale_angular:
        yaml_data["teleop"]["scale_angular"] = scale_angular
