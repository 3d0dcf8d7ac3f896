"""
Application Configuration - Composes domain configs.

Exports:
    AppConfig: Main configuration for the multisite directory
"""

import os
from typing import Dict, Optional, Tuple
from pydantic import BaseModel, Field, field_validator

from exceptions import ConfigurationError
from .defaults import AppDefaults, ImageSizeDefaults
from .asset_config import AssetConfig
from .database_config import DatabaseConfig


def _env_bool(name: str, default: bool) -> bool:
    return os.environ.get(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


class AppConfig(BaseModel):
    """
    Application configuration.

    Usage:
        config = AppConfig.from_environment()
        if config.multisite_enabled:
            site_id = config.resolve_directory_site_id()
    """

    environment: str = Field(default=AppDefaults.ENVIRONMENT)
    debug_mode: bool = Field(default=AppDefaults.DEBUG_MODE)
    log_level: str = Field(default=AppDefaults.LOG_LEVEL)

    multisite_enabled: bool = Field(
        default=AppDefaults.MULTISITE,
        description="Whether the host runs as a network; the directory renders nothing otherwise"
    )
    directory_site_id: Optional[int] = Field(
        default=None,
        description="Tenant housing the directory entries and categories"
    )
    current_network_id: int = Field(
        default=AppDefaults.NETWORK_ID,
        description="Network whose main site houses the directory when directory_site_id is unset"
    )
    main_site_id: int = Field(
        default=AppDefaults.MAIN_SITE_ID,
        description="Fallback directory tenant when the store knows no main site for the network"
    )
    directory_taxonomy: str = Field(default=AppDefaults.DIRECTORY_TAXONOMY)

    directory_backend: str = Field(default=AppDefaults.DIRECTORY_BACKEND)
    directory_data_path: str = Field(default=AppDefaults.DIRECTORY_DATA_PATH)

    image_sizes: Dict[str, Tuple[int, int]] = Field(
        default_factory=lambda: dict(ImageSizeDefaults.SIZES)
    )

    assets: AssetConfig = Field(default_factory=AssetConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    @field_validator("directory_backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in AppDefaults.VALID_BACKENDS:
            raise ValueError(
                f"directory_backend must be one of {AppDefaults.VALID_BACKENDS}, got {v!r}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    def resolve_directory_site_id(self) -> int:
        """
        Tenant id whose stores hold the directory.

        Explicit DIRECTORY_SITE_ID wins; otherwise MAIN_SITE_ID. The
        directory service consults the store for the network's main site
        before falling back to this.
        """
        if self.directory_site_id is not None:
            return self.directory_site_id
        return self.main_site_id

    @classmethod
    def from_environment(cls) -> "AppConfig":
        """Load all configs from environment."""
        try:
            return cls(
                environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
                debug_mode=_env_bool("DEBUG_MODE", AppDefaults.DEBUG_MODE),
                log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),
                multisite_enabled=_env_bool("MULTISITE", AppDefaults.MULTISITE),
                directory_site_id=_env_optional_int("DIRECTORY_SITE_ID"),
                current_network_id=_env_optional_int("NETWORK_ID") or AppDefaults.NETWORK_ID,
                main_site_id=_env_optional_int("MAIN_SITE_ID") or AppDefaults.MAIN_SITE_ID,
                directory_taxonomy=os.environ.get("DIRECTORY_TAXONOMY", AppDefaults.DIRECTORY_TAXONOMY),
                directory_backend=os.environ.get("DIRECTORY_BACKEND", AppDefaults.DIRECTORY_BACKEND),
                directory_data_path=os.environ.get("DIRECTORY_DATA_PATH", AppDefaults.DIRECTORY_DATA_PATH),
                assets=AssetConfig.from_environment(),
                database=DatabaseConfig.from_environment(),
            )
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            raise ConfigurationError(f"Invalid configuration: {e}") from e
