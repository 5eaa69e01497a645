"""
Store Settings

Connection and refresh settings for the Redis-backed store, loaded from
CONFSTORE_* environment variables (or a .env file) and optionally
overridden by a local YAML file.
"""

from pathlib import Path

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigStoreError
from .logging_setup import get_service_logger

logger = get_service_logger("settings")


class StoreSettings(BaseSettings):
    """
    Settings for one store instance.

    Create a .env file with e.g.:
    - CONFSTORE_NAMESPACE=billing-service
    - CONFSTORE_REDIS_HOST=redis.internal
    - CONFSTORE_REFRESH_INTERVAL_S=30
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    namespace: str = ""

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str | None = None
    # Takes precedence over host/port/db when set
    redis_url: str | None = None
    socket_timeout_s: float = 5.0

    refresh_interval_s: float = 60.0

    log_level: str = "INFO"
    log_format: str = "json"


def load_settings(path: str | Path | None = None) -> StoreSettings:
    """
    Build settings from the environment, then apply YAML overrides.

    Args:
        path: Optional YAML file with a flat mapping of setting names

    Returns:
        StoreSettings instance

    Raises:
        ConfigStoreError: YAML file exists but is malformed
    """
    if path is None:
        return StoreSettings()

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}")
        return StoreSettings()
    except yaml.YAMLError as e:
        raise ConfigStoreError(f"Error parsing settings file {path}: {e}", recoverable=False) from e

    if not isinstance(overrides, dict):
        raise ConfigStoreError(f"Settings file {path} must hold a mapping", recoverable=False)

    return StoreSettings(**overrides)
