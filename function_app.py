"""
Azure Functions entry point for the Multisite Directory.

Serves the network's site directory: the [site-directory] shortcode rendered
into member-site pages (category list or Leaflet map), the map's GeoJSON as
a standalone endpoint, and the client assets the map needs.

Architecture:
    HTTP request -> Trigger / Interface -> ShortcodeRegistry -> SiteDirectoryShortcode
                                                                    |
                                                   DirectoryService (tenant-scoped queries)
                                                                    |
                                                   IDirectoryRepository (memory or PostgreSQL)

Exports:
    app: Azure Function App instance

Dependencies:
    azure.functions: Azure Functions SDK
    triggers/*: HTTP trigger implementations
    web_interfaces: HTML page rendering
    shortcodes: Shortcode and asset registries

Endpoints:
    Core System:
        GET  /api/health - System health check with component status

    Directory:
        GET  /api/directory/geojson - Mappable categories with their sites (GeoJSON)
        GET  /api/interface/site-directory - Page with the shortcode expanded

    Static Assets:
        GET  /api/static/multisite-directory/{*filename} - Map script and stylesheet

Environment Variables:
    MULTISITE: Host runs as a network (default true)
    DIRECTORY_SITE_ID: Site whose stores hold the directory (optional)
    NETWORK_ID / MAIN_SITE_ID: Fallback tenant resolution
    DIRECTORY_BACKEND: "memory" or "postgres"
    DIRECTORY_DATA_PATH: JSON fixture for the memory backend
    POSTGIS_HOST, POSTGIS_DATABASE, POSTGIS_USER, POSTGIS_PASSWORD: postgres backend
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure SDK HTTP logging
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)

# Application modules (our code)
from config import get_config
from util_logger import LoggerFactory, ComponentType
from shortcodes import get_registries

# HTTP Trigger Classes
from triggers.health import health_check_trigger
from triggers.directory_geojson import directory_geojson_trigger
from triggers.static_files import static_files_handler

# Web interfaces (importing registers them)
from web_interfaces import unified_interface_handler

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")

# ========================================================================
# STARTUP REGISTRATION
# ========================================================================
# Shortcodes and their assets are declared once; pages only enqueue.
_shortcodes, _assets = get_registries()
logger.info(
    f"Registered shortcodes {_shortcodes.tags()} "
    f"(multisite={get_config().multisite_enabled}, backend={get_config().directory_backend})"
)

# Initialize function app with HTTP auth level
app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)


# ============================================================================
# CORE SYSTEM
# ============================================================================

@app.route(route="health", methods=["GET"])
def health(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint using HTTP trigger base class."""
    return health_check_trigger.handle_request(req)


# ============================================================================
# DIRECTORY
# ============================================================================

@app.route(route="directory/geojson", methods=["GET"])
def directory_geojson(req: func.HttpRequest) -> func.HttpResponse:
    """
    Mappable directory categories as a GeoJSON FeatureCollection.

    GET /api/directory/geojson?site_category_in=north,south&logo_size=thumbnail

    Accepts the shortcode's attributes as query parameters.
    """
    return directory_geojson_trigger.handle_request(req)


@app.route(route="interface/{name}", methods=["GET"])
def web_interface_unified(req: func.HttpRequest) -> func.HttpResponse:
    """
    Unified web interface handler.

    GET /api/interface/{name}

    Examples:
        /api/interface/site-directory?display=list&show_site_logo=true
        /api/interface/site-directory?site_id=3&style=height:400px
    """
    return unified_interface_handler(req)


# ============================================================================
# STATIC ASSETS
# ============================================================================

@app.route(route="static/multisite-directory/{*filename}", methods=["GET"])
def static_assets(req: func.HttpRequest) -> func.HttpResponse:
    """Map script and stylesheet from public/."""
    return static_files_handler(req)
