"""
Site directory page interface module.

Renders a page the way a member site would: expands [site-directory] and
prints the stylesheets and scripts the invocations enqueued.

Query parameters:
    site_id    Site the page belongs to (default: main site)
    text       Page text with shortcodes to expand
    content    Enclosed content (noscript fallback of the map)
    display, style, show_site_logo, logo_size, query_args, site_category_in
               Attributes of a single invocation, used when text is absent

Exports:
    SiteDirectoryInterface: Directory page
"""

import uuid
from typing import Any, Dict

import azure.functions as func

from config import ShortcodeDefaults, get_config
from core.attributes import DEFAULT_ATTRIBUTES
from core.render_context import RenderContext
from services.markup import esc_html
from shortcodes import get_registries
from web_interfaces.base import BaseInterface
from web_interfaces import InterfaceRegistry
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.INTERFACE, "SiteDirectoryInterface")


@InterfaceRegistry.register('site-directory')
class SiteDirectoryInterface(BaseInterface):
    """
    Directory page for one member site.

    Example:
        /api/interface/site-directory?display=list&show_site_logo=true
        /api/interface/site-directory?text=Members%20[site-directory]
    """

    def render(self, request: func.HttpRequest) -> str:
        config = get_config()
        params = self.get_query_params(request)

        site_id = self._parse_site_id(params.get('site_id'), config.main_site_id)
        shortcodes, assets = get_registries()
        context = RenderContext.for_page(
            current_site_id=site_id,
            registry=assets,
            multisite=config.multisite_enabled,
            request_id=str(uuid.uuid4())[:8],
        )

        text = params.get('text')
        if text:
            body = shortcodes.do_shortcode(text, context, literal_filter=esc_html)
        else:
            handler = shortcodes.get_handler(ShortcodeDefaults.TAG)
            body = handler(self._shortcode_attributes(params), params.get('content'), context,
                           url_encoded=False)

        logger.debug(
            f"Rendered directory page for site {site_id}",
            extra={"custom_dimensions": context.log_context(invocation=context.invocations).to_dict()}
        )

        if not body:
            body = self.render_empty_state(
                title="No directory to show",
                message="The directory has no categories with sites, or this host is not a network."
            )

        content = f"""
        {self.render_header("Site Directory", f"Site {site_id}")}
        <main class="page-content">
            {body}
        </main>
        """

        return self.wrap_html(
            title="Site Directory",
            content=content,
            head_html=context.assets.render_head(),
            footer_html=context.assets.render_footer(),
        )

    @staticmethod
    def _parse_site_id(value: Any, default: int) -> int:
        if value in (None, ""):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(f"site_id must be an integer, got {value!r}")

    @staticmethod
    def _shortcode_attributes(params: Dict[str, Any]) -> Dict[Any, str]:
        """Query parameters as tag attributes; flags given without a value become positional."""
        attrs: Dict[Any, str] = {}
        position = 0
        for name in DEFAULT_ATTRIBUTES:
            if name not in params:
                continue
            value = params[name]
            if value in (None, ""):
                attrs[position] = name
                position += 1
            else:
                attrs[name] = value
        return attrs
