"""
Shortcodes Package.

Exports:
    ShortcodeRegistry: Tag -> handler registry with do_shortcode expansion
    SiteDirectoryShortcode: [site-directory] handler
    register_site_directory: Startup registration of the tag and its assets
    create_registries: Fresh shortcode and asset registries with everything registered
    get_registries: Application-wide registries (singleton)
"""

from typing import Optional, Tuple

from config import AppConfig
from core.assets import AssetRegistry
from .registry import ShortcodeRegistry, parse_shortcode_attrs, shortcode_regex
from .site_directory import SiteDirectoryShortcode, register as register_site_directory


def create_registries(config: Optional[AppConfig] = None,
                      service=None) -> Tuple[ShortcodeRegistry, AssetRegistry]:
    """
    Build the registries an application renders pages with.

    Args:
        config: Application config (uses singleton if not provided)
        service: DirectoryService override (configured backend if not provided)
    """
    shortcodes = ShortcodeRegistry()
    assets = AssetRegistry()
    register_site_directory(shortcodes, assets, config=config, service=service)
    return shortcodes, assets


# Module-level singleton
_registries: Optional[Tuple[ShortcodeRegistry, AssetRegistry]] = None


def get_registries() -> Tuple[ShortcodeRegistry, AssetRegistry]:
    """
    Get the application's registries, built on first use.
    """
    global _registries
    if _registries is None:
        _registries = create_registries()
    return _registries


def reset_registries() -> None:
    global _registries
    _registries = None


__all__ = [
    'ShortcodeRegistry',
    'SiteDirectoryShortcode',
    'parse_shortcode_attrs',
    'shortcode_regex',
    'register_site_directory',
    'create_registries',
    'get_registries',
    'reset_registries',
]
