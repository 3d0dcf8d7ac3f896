"""
HTML escaping helpers shared by the renderers.

Exports:
    esc_html: Escape text for element content
    esc_attr: Escape text for a quoted attribute value
    esc_url: Clean and escape a URL for an href/src attribute
"""

import html
from urllib.parse import urlsplit

# Schemes a rendered link may use; anything else is dropped
ALLOWED_URL_SCHEMES = frozenset({"http", "https", "mailto", "ftp", "ftps", "tel"})


def esc_html(text) -> str:
    return html.escape("" if text is None else str(text), quote=True)


# Quotes are escaped in both contexts
esc_attr = esc_html


def esc_url(url) -> str:
    """
    Escape a URL for an attribute context.

    Returns "" for URLs using a scheme outside ALLOWED_URL_SCHEMES
    (javascript:, data:, ...). Scheme-less and relative URLs are kept.
    """
    if url is None:
        return ""
    url = str(url).strip()
    if not url:
        return ""
    # Control characters and whitespace inside the scheme are a common bypass
    cleaned = "".join(ch for ch in url if ch >= " " and ch != "\x7f").replace(" ", "%20")
    try:
        scheme = urlsplit(cleaned).scheme.lower()
    except ValueError:
        return ""
    if scheme and scheme not in ALLOWED_URL_SCHEMES:
        return ""
    return html.escape(cleaned, quote=True)
