"""
Config test fixtures: clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "ENVIRONMENT", "DEBUG_MODE", "LOG_LEVEL", "MULTISITE",
        "DIRECTORY_SITE_ID", "NETWORK_ID", "MAIN_SITE_ID", "DIRECTORY_TAXONOMY",
        "DIRECTORY_BACKEND", "DIRECTORY_DATA_PATH",
        "ASSET_BASE_URL", "LEAFLET_VERSION", "LEAFLET_CDN_TEMPLATE", "JQUERY_URL",
        "POSTGIS_HOST", "POSTGIS_PORT", "POSTGIS_DATABASE", "POSTGIS_USER",
        "POSTGIS_PASSWORD", "POSTGIS_SSLMODE", "DIRECTORY_SCHEMA",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
