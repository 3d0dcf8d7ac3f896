"""
Directory Map Renderer.

Emits the map container and hands the FeatureCollection to the map script
as a page global:

    <div id="site-directory-0" class="site-directory-map" style="height:400px"></div>

    <script id="multisite-directory-map-js-extra">
    var multisite_directory_site_directory_0 = {"type": "FeatureCollection", ...};
    var multisite_directory_map_ui_strings = {"i18n_no_sites_at_location": "..."};
    </script>

The script reads the global named after the container id.
"""

from config import AssetDefaults, ShortcodeDefaults
from core.models import ShortcodeOptions
from core.render_context import RenderContext
from util_logger import LoggerFactory, ComponentType
from .directory_service import DirectoryService
from .geojson_builder import build_feature_collection
from .markup import esc_attr, esc_html

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "MapRenderer")


def map_container_id(invocation: int) -> str:
    """Container id of the n-th invocation on a page."""
    return f"{ShortcodeDefaults.TAG}-{invocation}"


def map_data_object_name(container_id: str) -> str:
    """JavaScript global holding a container's FeatureCollection."""
    return f"{ShortcodeDefaults.DATA_OBJECT_PREFIX}{container_id}".replace('-', '_')


def enqueue_map_assets(context: RenderContext) -> None:
    """Leaflet once per page, then the directory map script and style."""
    assets = context.assets
    leaflet = AssetDefaults.LEAFLET_HANDLE
    if not assets.script_is(leaflet) or not assets.style_is(leaflet):
        assets.enqueue_style(leaflet)
        assets.enqueue_script(leaflet)
    assets.enqueue_style(AssetDefaults.MAP_HANDLE)
    assets.enqueue_script(AssetDefaults.MAP_HANDLE)


def render_directory_map(
    service: DirectoryService,
    options: ShortcodeOptions,
    context: RenderContext,
    invocation: int,
    content: str = ""
) -> str:
    """
    Render the map view.

    Args:
        service: Directory query layer
        options: Parsed shortcode options
        context: Page render state receiving the enqueued assets and data
        invocation: Zero-based invocation index on the page
        content: Enclosed shortcode content, shown when scripts are disabled

    Returns:
        Container markup
    """
    container_id = map_container_id(invocation)

    terms = service.list_location_categories(options.term_query_args)
    collection = build_feature_collection(service, terms, options.logo_size, options.query_args)

    enqueue_map_assets(context)
    context.assets.localize_script(
        AssetDefaults.MAP_HANDLE,
        map_data_object_name(container_id),
        collection.to_geojson(),
    )
    context.assets.localize_script(
        AssetDefaults.MAP_HANDLE,
        ShortcodeDefaults.UI_STRINGS_OBJECT,
        dict(ShortcodeDefaults.UI_STRINGS),
    )

    logger.debug(f"Prepared map {container_id} with {len(collection.features)} features")

    html = (
        f'<div id="{esc_attr(container_id)}" class="{esc_attr(ShortcodeDefaults.MAP_CLASS)}" '
        f'style="{esc_attr(options.style)}">'
    )
    if content:
        html += f'<noscript>{esc_html(content)}</noscript>'
    html += '</div>'
    return html
