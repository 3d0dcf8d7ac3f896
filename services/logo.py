# ============================================================================
# LOGO MARKUP
# ============================================================================
# STATUS: Service - image markup for directory entries and site logos
# PURPOSE: Pick an image rendition for a size and render <img> markup
# EXPORTS: constrain_dimensions, select_rendition, featured_image_html, custom_logo_html
# DEPENDENCIES: core.models, services.markup
# ============================================================================
"""
Logo Markup.

A size is either a registered size name ("thumbnail", "medium", ...) or an
explicit (width, height) box:

    featured_image_html(entry.thumbnail, "thumbnail", sizes)
    featured_image_html(entry.thumbnail, (72, 72), sizes)

Named sizes use the stored rendition of that name when the image has one,
otherwise the full image scaled into the registered box. Boxes use the
smallest rendition at least as large as the box (else the full image),
scaled down to fit.
"""

from typing import Dict, Optional, Tuple

from core.models import ImageAttachment, LogoSize, SiteDetails
from .markup import esc_attr, esc_url


def constrain_dimensions(width: int, height: int,
                         max_width: int = 0, max_height: int = 0) -> Tuple[int, int]:
    """
    Scale (width, height) proportionally to fit inside the box.

    A zero limit means unbounded in that direction. Never scales up.
    """
    if not width or not height or (not max_width and not max_height):
        return width, height

    ratio = 1.0
    if max_width and width > max_width:
        ratio = min(ratio, max_width / width)
    if max_height and height > max_height:
        ratio = min(ratio, max_height / height)
    if ratio == 1.0:
        return width, height
    return max(1, int(round(width * ratio))), max(1, int(round(height * ratio)))


def select_rendition(
    image: ImageAttachment,
    size: LogoSize,
    image_sizes: Dict[str, Tuple[int, int]]
) -> Tuple[str, int, int, str]:
    """
    Choose the image file and display dimensions for a size.

    Returns:
        (url, width, height, size class name)
    """
    if isinstance(size, str):
        if size in image.sizes:
            rendition = image.sizes[size]
            return rendition.url, rendition.width, rendition.height, size
        box = image_sizes.get(size)
        if box is None:
            # Unknown names and "full" show the original image
            return image.url, image.width, image.height, size
        width, height = constrain_dimensions(image.width, image.height, *box)
        return image.url, width, height, size

    box_width, box_height = size
    size_class = f"{box_width}x{box_height}"
    covering = [
        r for r in image.sizes.values()
        if r.width >= box_width and r.height >= box_height
    ]
    if covering:
        best = min(covering, key=lambda r: r.width * r.height)
        url, width, height = best.url, best.width, best.height
    else:
        url, width, height = image.url, image.width, image.height
    width, height = constrain_dimensions(width, height, box_width, box_height)
    return url, width, height, size_class


def _img_tag(url: str, width: int, height: int, css_class: str, alt: str) -> str:
    dimensions = ""
    if width and height:
        dimensions = f'width="{width}" height="{height}" '
    return (
        f'<img {dimensions}src="{esc_url(url)}" '
        f'class="{esc_attr(css_class)}" alt="{esc_attr(alt)}" decoding="async">'
    )


def featured_image_html(
    image: Optional[ImageAttachment],
    size: LogoSize,
    image_sizes: Dict[str, Tuple[int, int]]
) -> str:
    """
    Featured image markup for a directory entry, "" without an image.
    """
    if image is None or not image.url:
        return ""
    url, width, height, size_class = select_rendition(image, size, image_sizes)
    css_class = f"attachment-{size_class} size-{size_class} wp-post-image"
    return _img_tag(url, width, height, css_class, image.alt)


def custom_logo_html(site: Optional[SiteDetails]) -> str:
    """
    A site's custom logo linked to its home page, "" without a logo.
    """
    if site is None or site.custom_logo is None or not site.custom_logo.url:
        return ""
    logo = site.custom_logo
    img = _img_tag(logo.url, logo.width, logo.height, "custom-logo", logo.alt or site.blogname)
    return f'<a href="{esc_url(site.siteurl)}" class="custom-logo-link" rel="home">{img}</a>'
