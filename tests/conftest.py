"""
Root conftest.py: sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without a database or Azure Functions host.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'services', 'config', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

SAMPLE_DATA_PATH = os.path.join(PROJECT_ROOT, "data", "directory.json")


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Point the application at the bundled sample directory.

    Singletons (config, repository, registries) read these on first use.
    """
    defaults = {
        "ENVIRONMENT": "dev",
        "MULTISITE": "true",
        "DIRECTORY_BACKEND": "memory",
        "DIRECTORY_DATA_PATH": SAMPLE_DATA_PATH,
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Every test starts from freshly built config, stores and registries."""
    from config import reset_config
    from infrastructure.factory import reset_directory_repository
    from services import reset_directory_service
    from shortcodes import reset_registries

    def _reset():
        reset_config()
        reset_directory_repository()
        reset_directory_service()
        reset_registries()

    _reset()
    yield
    _reset()


@pytest.fixture
def sample_data_path():
    return SAMPLE_DATA_PATH
