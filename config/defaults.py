"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - AppDefaults: Environment, logging and tenant resolution
    - ShortcodeDefaults: Tag name, attribute defaults, markup constants
    - AssetDefaults: Script/style handles and their source locations
    - DatabaseDefaults: PostgreSQL connection defaults for the postgres backend
    - ImageSizeDefaults: Registered image sizes used for logo markup

Usage:
    from config.defaults import ShortcodeDefaults, AssetDefaults

    # In Pydantic Field definitions:
    port: int = Field(default=DatabaseDefaults.PORT, ...)
"""


# =============================================================================
# APP DEFAULTS
# =============================================================================

class AppDefaults:
    """Core application defaults."""

    ENVIRONMENT = "dev"
    DEBUG_MODE = False
    LOG_LEVEL = "INFO"

    # Sites render nothing unless the host runs as a network
    MULTISITE = True

    # Main site of a network without multi-network support
    MAIN_SITE_ID = 1
    NETWORK_ID = 1

    DIRECTORY_TAXONOMY = "site_directory_category"

    # "memory" (JSON fixture file) or "postgres"
    DIRECTORY_BACKEND = "memory"
    DIRECTORY_DATA_PATH = "data/directory.json"

    VALID_BACKENDS = ("memory", "postgres")


# =============================================================================
# SHORTCODE DEFAULTS
# =============================================================================

class ShortcodeDefaults:
    """Shortcode tag and attribute defaults."""

    TAG = "site-directory"

    DISPLAY = "map"
    STYLE = ""
    SHOW_SITE_LOGO = False
    LOGO_SIZE = (72, 72)

    # Markup
    LIST_CLASS = "network-directory-sites"
    MAP_CLASS = "site-directory-map"

    # Script data globals
    DATA_OBJECT_PREFIX = "multisite_directory_"
    UI_STRINGS_OBJECT = "multisite_directory_map_ui_strings"

    UI_STRINGS = {
        "i18n_no_sites_at_location": "No sites at this location.",
    }

    # Term meta key holding "lat,lng"
    GEO_META_KEY = "geo"

    # Entry field linking a directory entry to its member site
    BLOG_ID_META_KEY = "blog_id"


# =============================================================================
# ASSET DEFAULTS
# =============================================================================

class AssetDefaults:
    """Script and style handles plus where they are served from."""

    MAP_HANDLE = "multisite-directory-map"
    LEAFLET_HANDLE = "leaflet"
    JQUERY_HANDLE = "jquery"

    # Served by the static route; relative paths are joined onto ASSET_BASE_URL
    ASSET_BASE_URL = "/api/static/multisite-directory"
    MAP_SCRIPT_PATH = "public/js/multisite-directory-map.js"
    MAP_STYLE_PATH = "public/css/multisite-directory-map.css"

    LEAFLET_VERSION = "1.9.4"
    LEAFLET_CDN_TEMPLATE = "https://unpkg.com/leaflet@{version}/dist"
    JQUERY_URL = "https://code.jquery.com/jquery-3.7.1.min.js"


# =============================================================================
# DATABASE DEFAULTS
# =============================================================================

class DatabaseDefaults:
    """PostgreSQL defaults for the postgres directory backend."""

    PORT = 5432
    SCHEMA = "directory"
    SSLMODE = "prefer"
    CONNECT_TIMEOUT_SECONDS = 10


# =============================================================================
# IMAGE SIZE DEFAULTS
# =============================================================================

class ImageSizeDefaults:
    """Registered image sizes: name -> (max width, max height)."""

    SIZES = {
        "thumbnail": (150, 150),
        "post-thumbnail": (150, 150),
        "medium": (300, 300),
        "large": (1024, 1024),
    }
