# ============================================================================
# SITE DIRECTORY SHORTCODE
# ============================================================================
# STATUS: Shortcodes - [site-directory] handler and startup registration
# PURPOSE: Dispatch one invocation: multisite check, attribute parsing, list or map
# EXPORTS: SiteDirectoryShortcode, register
# DEPENDENCIES: config, core, services, shortcodes.registry
# ============================================================================

"""
Site Directory Shortcode.

Dispatch of one invocation:

    INVOKED (invocation index taken)
      -> not a network: ""
      -> PARSE attributes (invalid input: logged, "")
      -> PREPARE list or map
      -> RETURN markup

The invocation index is taken before anything else, so container ids stay
stable even when earlier invocations rendered nothing.

Attributes:
    display            "list" or "map" (default "map")
    style              inline style of the map container
    show_site_logo     show logos in the list (flag)
    logo_size          size name or [width, height] JSON (default [72, 72])
    query_args         URL-encoded JSON filter
    site_category_in   comma-separated category slugs
"""

from typing import Any, Optional

from config import AppConfig, AssetDefaults, ShortcodeDefaults, get_config
from core.assets import AssetRegistry
from core.attributes import parse_shortcode_attributes
from core.render_context import RenderContext
from exceptions import InvalidInputError, NotApplicableError
from services import DirectoryService, get_directory_service, get_renderer
from util_logger import LoggerFactory, ComponentType
from .registry import ShortcodeRegistry

logger = LoggerFactory.create_logger(ComponentType.SHORTCODE, "SiteDirectoryShortcode")


class SiteDirectoryShortcode:
    """
    Handler for [site-directory].

    Usage:
        handler = SiteDirectoryShortcode(service=service)
        html = handler({'display': 'list'}, None, context)
    """

    tag = ShortcodeDefaults.TAG

    def __init__(self, service: Optional[DirectoryService] = None,
                 config: Optional[AppConfig] = None):
        self.config = config or get_config()
        self._service = service

    @property
    def service(self) -> DirectoryService:
        # Resolved on first render so registration never touches the stores
        if self._service is None:
            self._service = get_directory_service()
        return self._service

    def __call__(self, atts: Any, content: Optional[str], context: RenderContext,
                 url_encoded: bool = True) -> str:
        invocation = context.next_invocation()
        dimensions = context.log_context(invocation=invocation, shortcode=self.tag).to_dict()

        try:
            return self.render(atts, content, context, invocation, url_encoded)
        except NotApplicableError as e:
            logger.debug(f"[{self.tag}] skipped: {e}", extra={'custom_dimensions': dimensions})
            return ""
        except InvalidInputError as e:
            logger.warning(f"[{self.tag}] invalid attributes: {e}", extra={'custom_dimensions': dimensions})
            return ""

    def render(self, atts: Any, content: Optional[str], context: RenderContext,
               invocation: int, url_encoded: bool = True) -> str:
        """
        Render one invocation.

        url_encoded is False when atts come from an already decoded query string.

        Raises:
            NotApplicableError: The host is not running as a network
            InvalidInputError: Attributes cannot be parsed
        """
        if not context.multisite:
            raise NotApplicableError("site directory requires multisite mode")

        options = parse_shortcode_attributes(atts, taxonomy=self.config.directory_taxonomy,
                                             url_encoded=url_encoded)
        renderer = get_renderer(options.display)
        return renderer(self.service, options, context, invocation, content or "")


def register(
    shortcodes: ShortcodeRegistry,
    assets: AssetRegistry,
    config: Optional[AppConfig] = None,
    service: Optional[DirectoryService] = None
) -> SiteDirectoryShortcode:
    """
    Register the shortcode and declare (not enqueue) its assets.

    Returns:
        The registered handler
    """
    config = config or get_config()
    handler = SiteDirectoryShortcode(service=service, config=config)
    shortcodes.register(SiteDirectoryShortcode.tag, handler)

    asset_config = config.assets
    assets.register_style(AssetDefaults.MAP_HANDLE, asset_config.map_style_url)
    assets.register_script(
        AssetDefaults.MAP_HANDLE,
        asset_config.map_script_url,
        deps=[AssetDefaults.LEAFLET_HANDLE, AssetDefaults.JQUERY_HANDLE],
        in_footer=True,
    )

    # Vendor libraries the map script depends on
    assets.register_style(AssetDefaults.LEAFLET_HANDLE, asset_config.leaflet_css)
    assets.register_script(AssetDefaults.LEAFLET_HANDLE, asset_config.leaflet_js)
    assets.register_script(AssetDefaults.JQUERY_HANDLE, asset_config.jquery_url)

    return handler

