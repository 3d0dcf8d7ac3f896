"""
Directory List Renderer.

Renders categories and their member sites as nested lists:

    <ul class="network-directory-sites">
        <li>Boston
            <ul>
            <li><a href="https://a.example/">Site A</a></li>
            </ul>
        </li>
    </ul>

Categories without sites are left out, and the site being viewed never
lists itself.
"""

from typing import List

from config import ShortcodeDefaults
from core.models import ShortcodeOptions
from util_logger import LoggerFactory, ComponentType
from .directory_service import DirectoryService
from .markup import esc_html, esc_url

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ListRenderer")


def render_directory_list(
    service: DirectoryService,
    options: ShortcodeOptions,
    current_site_id: int
) -> str:
    """
    Render the list view.

    Args:
        service: Directory query layer
        options: Parsed shortcode options
        current_site_id: Site whose page is being rendered

    Returns:
        List markup, "" when there are no categories
    """
    terms = service.list_categories(options.term_query_args)
    if not terms:
        return ""

    items: List[str] = []
    for term in terms:
        sites = service.list_sites_by_term(term, options.query_args)
        if not sites:
            continue

        site_items = []
        for site in sites:
            if site.blog_id == current_site_id:
                continue
            logo = ""
            if options.show_site_logo:
                logo = service.get_site_logo(site.blog_id, options.logo_size)
            site_items.append(
                f'        <li>\n'
                f'            {logo}\n'
                f'            <a href="{esc_url(site.siteurl)}">{esc_html(site.blogname)}</a>\n'
                f'        </li>'
            )

        inner = "\n".join(site_items)
        items.append(
            f'    <li>{esc_html(term.name)}\n'
            f'        <ul>\n{inner}\n        </ul>\n'
            f'    </li>'
        )

    logger.debug(f"Rendered {len(items)} of {len(terms)} categories for site {current_site_id}")
    body = "\n".join(items)
    return f'<ul class="{ShortcodeDefaults.LIST_CLASS}">\n{body}\n</ul>\n'
