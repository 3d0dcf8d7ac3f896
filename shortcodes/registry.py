# ============================================================================
# SHORTCODE REGISTRY
# ============================================================================
# STATUS: Shortcodes - tag registration and expansion
# PURPOSE: Non-singleton registry mapping tags to handlers; expands tags in text
# EXPORTS: ShortcodeRegistry, ShortcodeHandler, parse_shortcode_attrs, shortcode_regex
# DEPENDENCIES: re, core.render_context
# PATTERNS: Instance-based registry (NOT singleton), explicit registration
# ============================================================================

"""
Shortcode Registry.

Shortcodes are bracketed placeholders expanded to markup at render time:

    [site-directory display="list" show_site_logo]
    [site-directory style="height:400px"]Our member sites[/site-directory]
    [[site-directory]]        (escaped, printed literally as [site-directory])

Attribute syntax: name="value", name='value', name=value, and bare
positional values, which are stored under integer keys.

Usage:
    shortcodes = ShortcodeRegistry()
    shortcodes.register("site-directory", handler)
    html = shortcodes.do_shortcode(page_text, context)
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Pattern

from core.render_context import RenderContext

logger = logging.getLogger(__name__)

# handler(attributes, enclosed content or None, page render context) -> markup
ShortcodeHandler = Callable[[Dict[Any, str], Optional[str], RenderContext], str]

_ATTRIBUTE_PATTERN = re.compile(
    r'([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)'
    r"|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"
    r'|([\w-]+)\s*=\s*([^\s\'"]+)(?:\s|$)'
    r'|"([^"]*)"(?:\s|$)'
    r"|'([^']*)'(?:\s|$)"
    r'|(\S+)(?:\s|$)'
)

# Non-breaking and zero-width spaces count as whitespace between attributes
_SPACE_LIKE = re.compile(r'[\u00a0\u200b]+')


def parse_shortcode_attrs(text: str) -> Dict[Any, str]:
    """
    Parse the attribute part of a shortcode tag.

    Named attributes are keyed by lowercased name; positional values get
    integer keys in order of appearance.

    Example:
        parse_shortcode_attrs('display="list" show_site_logo')
        # {'display': 'list', 0: 'show_site_logo'}
    """
    attrs: Dict[Any, str] = {}
    text = _SPACE_LIKE.sub(' ', text or '')
    position = 0
    for m in _ATTRIBUTE_PATTERN.finditer(text):
        if m.group(1):
            attrs[m.group(1).lower()] = m.group(2)
        elif m.group(3):
            attrs[m.group(3).lower()] = m.group(4)
        elif m.group(5):
            attrs[m.group(5).lower()] = m.group(6)
        else:
            value = next(g for g in (m.group(7), m.group(8), m.group(9)) if g is not None)
            attrs[position] = value
            position += 1
    return attrs


def shortcode_regex(tags: Iterable[str]) -> Pattern[str]:
    """
    Pattern matching any of the tags.

    Groups:
        1: extra "[" escaping the tag
        2: tag name
        3: attribute text
        4: "/" of a self-closing tag
        5: enclosed content
        6: extra "]" escaping the tag
    """
    names = "|".join(re.escape(tag) for tag in tags)
    return re.compile(
        r'\[(\[?)'
        r'(' + names + r')'
        r'(?![\w-])'
        r'([^\]/]*(?:/(?!\])[^\]/]*)*?)'
        r'(?:(/)\]|\](?:([^\[]*(?:\[(?!/\2\])[^\[]*)*)\[/\2\])?)'
        r'(\]?)'
    )


class ShortcodeRegistry:
    """
    Non-singleton registry of shortcode handlers.

    Each application (or test) creates its own instance.
    """

    def __init__(self):
        self._handlers: Dict[str, ShortcodeHandler] = {}

    def register(self, tag: str, handler: ShortcodeHandler) -> None:
        """
        Register a handler for a tag.

        Raises:
            ValueError: Tag already registered or contains invalid characters
        """
        if not tag or re.search(r'[<>&/\[\]\x00-\x20=]', tag):
            raise ValueError(f"Invalid shortcode tag: {tag!r}")
        if tag in self._handlers:
            raise ValueError(f"Shortcode '{tag}' already registered")
        self._handlers[tag] = handler
        logger.info(f"Registered shortcode: [{tag}]")

    def get_handler(self, tag: str) -> ShortcodeHandler:
        """
        Raises:
            ValueError: No handler registered for tag
        """
        if tag not in self._handlers:
            available = ', '.join(sorted(self._handlers)) or 'none'
            raise ValueError(f"No shortcode registered for '{tag}'. Available: {available}")
        return self._handlers[tag]

    def has(self, tag: str) -> bool:
        return tag in self._handlers

    def tags(self) -> List[str]:
        return list(self._handlers)

    def do_shortcode(self, text: str, context: RenderContext,
                     literal_filter: Optional[Callable[[str], str]] = None) -> str:
        """
        Expand every registered shortcode in text.

        Unregistered tags and escaped tags ([[tag]]) are left as written
        (escaped tags lose one pair of brackets).

        Args:
            text: Text containing shortcodes
            context: Page render state shared by all invocations
            literal_filter: Applied to every part of text that is not
                handler output, e.g. esc_html for untrusted text
        """
        keep = literal_filter or (lambda s: s)
        if not text or '[' not in text or not self._handlers:
            return keep(text) if text else text

        pattern = shortcode_regex(self._handlers)
        parts: List[str] = []
        position = 0

        for m in pattern.finditer(text):
            parts.append(keep(text[position:m.start()]))
            position = m.end()
            if m.group(1) == '[' and m.group(6) == ']':
                parts.append(keep(m.group(0)[1:-1]))
                continue
            handler = self._handlers[m.group(2)]
            attrs = parse_shortcode_attrs(m.group(3))
            output = handler(attrs, m.group(5), context)
            parts.append(keep(m.group(1)) + (output or "") + keep(m.group(6)))

        parts.append(keep(text[position:]))
        return "".join(parts)
