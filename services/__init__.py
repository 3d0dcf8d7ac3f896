"""
Service Registry - Explicit Registration (No Decorators!)

Display renderers are registered here explicitly. If a display mode is not
in ALL_RENDERERS, the shortcode cannot render it.

Renderer Contract:
    def renderer(service: DirectoryService, options: ShortcodeOptions,
                 context: RenderContext, invocation: int, content: str) -> str:
        '''Return markup; "" when there is nothing to show.'''

Exports:
    DirectoryService, get_directory_service: Directory query layer
    ALL_RENDERERS: DisplayMode -> renderer
    get_renderer: Lookup with a clear error for unknown modes
"""

from typing import Callable, Dict

from core.models import DisplayMode, ShortcodeOptions
from core.render_context import RenderContext
from .directory_service import DirectoryService, get_directory_service, reset_directory_service
from .geojson_builder import build_feature_collection, geo_string_to_position
from .list_renderer import render_directory_list
from .map_renderer import render_directory_map

Renderer = Callable[[DirectoryService, ShortcodeOptions, RenderContext, int, str], str]


def _render_list(service: DirectoryService, options: ShortcodeOptions,
                 context: RenderContext, invocation: int, content: str) -> str:
    # The list view ignores enclosed content and the invocation index
    return render_directory_list(service, options, context.current_site_id)


ALL_RENDERERS: Dict[DisplayMode, Renderer] = {
    DisplayMode.LIST: _render_list,
    DisplayMode.MAP: render_directory_map,
}


def get_renderer(display: DisplayMode) -> Renderer:
    """
    Renderer for a display mode.

    Raises:
        ValueError: Display mode has no registered renderer
    """
    if display not in ALL_RENDERERS:
        available = ", ".join(mode.value for mode in ALL_RENDERERS)
        raise ValueError(f"No renderer for display '{display}'. Available: {available}")
    return ALL_RENDERERS[display]


__all__ = [
    'DirectoryService',
    'get_directory_service',
    'reset_directory_service',
    'build_feature_collection',
    'geo_string_to_position',
    'render_directory_list',
    'render_directory_map',
    'ALL_RENDERERS',
    'get_renderer',
]
