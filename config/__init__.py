# ============================================================================
# CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration package exports
# PURPOSE: get_config singleton plus domain config classes
# EXPORTS: AppConfig, AssetConfig, DatabaseConfig, get_config, reset_config, debug_config
# DEPENDENCIES: pydantic, domain config modules
# ============================================================================

"""
Configuration Package

Structure:
    config/
    ├── __init__.py          # This file - exports and singleton
    ├── app_config.py        # Main config (composes domain configs)
    ├── asset_config.py      # Script/style source locations
    ├── database_config.py   # PostgreSQL backend
    └── defaults.py          # Default values

Usage:
    from config import get_config
    config = get_config()
    tenant = config.resolve_directory_site_id()
"""

from typing import Optional

from .defaults import (
    AppDefaults,
    ShortcodeDefaults,
    AssetDefaults,
    DatabaseDefaults,
    ImageSizeDefaults,
)
from .asset_config import AssetConfig
from .database_config import DatabaseConfig
from .app_config import AppConfig

__version__ = "0.3.0"


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).
    """
    config = get_config()
    return {
        'environment': config.environment,
        'debug_mode': config.debug_mode,
        'multisite_enabled': config.multisite_enabled,
        'directory_site_id': config.resolve_directory_site_id(),
        'directory_taxonomy': config.directory_taxonomy,
        'directory_backend': config.directory_backend,
        'directory_data_path': config.directory_data_path,
        'assets': config.assets.model_dump(),
        'database': config.database.debug_dict(),
    }


__all__ = [
    'AppConfig',
    'AssetConfig',
    'DatabaseConfig',
    'AppDefaults',
    'ShortcodeDefaults',
    'AssetDefaults',
    'DatabaseDefaults',
    'ImageSizeDefaults',
    'get_config',
    'reset_config',
    'debug_config',
    '__version__',
]
