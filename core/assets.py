# ============================================================================
# SCRIPT AND STYLE REGISTRY
# ============================================================================
# STATUS: Core - asset declarations (startup) and enqueueing (per page)
# PURPOSE: Declare scripts/styles once, enqueue them idempotently per render
# EXPORTS: AssetDefinition, AssetRegistry, PageAssets
# DEPENDENCIES: json, html
# ============================================================================
"""
Script and Style Registry.

Assets are declared once at startup on an AssetRegistry (handle, source,
dependencies, footer flag). Each page render gets its own PageAssets that
records which handles were enqueued and which script data was localized,
then prints the tags in dependency order.

Usage:
    registry = AssetRegistry()
    registry.register_script("leaflet", "https://unpkg.com/leaflet@1.9.4/dist/leaflet.js")
    registry.register_script("directory-map", "/static/map.js", deps=["leaflet"], in_footer=True)

    page = PageAssets(registry)
    page.enqueue_script("directory-map")       # enqueues leaflet first
    page.localize_script("directory-map", "directory_data", {"type": "FeatureCollection"})
    footer_html = page.render_footer()
"""

import html
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

SCRIPT = "script"
STYLE = "style"


@dataclass
class AssetDefinition:
    """A declared script or stylesheet."""
    handle: str
    src: str
    kind: str
    deps: List[str] = field(default_factory=list)
    version: Optional[str] = None
    in_footer: bool = False

    @property
    def url(self) -> str:
        if not self.version:
            return self.src
        separator = '&' if '?' in self.src else '?'
        return f"{self.src}{separator}ver={self.version}"


class AssetRegistry:
    """
    Non-singleton registry of asset declarations.

    Declaring never enqueues; pages decide what to load.
    """

    def __init__(self):
        self._assets: Dict[Tuple[str, str], AssetDefinition] = {}

    def _register(self, definition: AssetDefinition) -> bool:
        key = (definition.kind, definition.handle)
        if key in self._assets:
            logger.debug(f"{definition.kind} '{definition.handle}' already registered, keeping first")
            return False
        self._assets[key] = definition
        logger.debug(f"Registered {definition.kind} '{definition.handle}' -> {definition.src}")
        return True

    def register_script(
        self,
        handle: str,
        src: str,
        deps: Optional[List[str]] = None,
        version: Optional[str] = None,
        in_footer: bool = False
    ) -> bool:
        """
        Declare a script.

        Returns:
            False when the handle was already registered (first one wins)
        """
        return self._register(AssetDefinition(
            handle=handle, src=src, kind=SCRIPT,
            deps=list(deps or []), version=version, in_footer=in_footer
        ))

    def register_style(
        self,
        handle: str,
        src: str,
        deps: Optional[List[str]] = None,
        version: Optional[str] = None
    ) -> bool:
        """Declare a stylesheet."""
        return self._register(AssetDefinition(
            handle=handle, src=src, kind=STYLE,
            deps=list(deps or []), version=version
        ))

    def get(self, kind: str, handle: str) -> Optional[AssetDefinition]:
        return self._assets.get((kind, handle))

    def is_registered(self, kind: str, handle: str) -> bool:
        return (kind, handle) in self._assets

    def handles(self, kind: str) -> List[str]:
        return [handle for (k, handle) in self._assets if k == kind]


class PageAssets:
    """
    Enqueued assets and localized script data for one page render.
    """

    def __init__(self, registry: AssetRegistry):
        self.registry = registry
        self._queues: Dict[str, List[str]] = {SCRIPT: [], STYLE: []}
        self._localized: Dict[str, List[Tuple[str, Any]]] = {}

    # ------------------------------------------------------------------
    # Enqueueing
    # ------------------------------------------------------------------

    def _enqueue(self, kind: str, handle: str, _stack: Tuple[str, ...] = ()) -> bool:
        if handle in self._queues[kind]:
            return True
        definition = self.registry.get(kind, handle)
        if definition is None:
            logger.warning(f"Cannot enqueue unregistered {kind} '{handle}'")
            return False
        if handle in _stack:
            logger.warning(f"Dependency cycle while enqueueing {kind} '{handle}': {_stack}")
            return False
        for dep in definition.deps:
            self._enqueue(kind, dep, _stack + (handle,))
        self._queues[kind].append(handle)
        return True

    def enqueue_script(self, handle: str) -> bool:
        """Enqueue a registered script and its dependencies, once."""
        return self._enqueue(SCRIPT, handle)

    def enqueue_style(self, handle: str) -> bool:
        """Enqueue a registered stylesheet and its dependencies, once."""
        return self._enqueue(STYLE, handle)

    def _status(self, kind: str, handle: str, status: str) -> bool:
        if status == "enqueued":
            return handle in self._queues[kind]
        if status == "registered":
            return self.registry.is_registered(kind, handle)
        raise ValueError(f"Unknown asset status: {status}")

    def script_is(self, handle: str, status: str = "enqueued") -> bool:
        return self._status(SCRIPT, handle, status)

    def style_is(self, handle: str, status: str = "enqueued") -> bool:
        return self._status(STYLE, handle, status)

    @property
    def enqueued_scripts(self) -> List[str]:
        return list(self._queues[SCRIPT])

    @property
    def enqueued_styles(self) -> List[str]:
        return list(self._queues[STYLE])

    # ------------------------------------------------------------------
    # Script data
    # ------------------------------------------------------------------

    def localize_script(self, handle: str, object_name: str, data: Any) -> bool:
        """
        Attach a global JavaScript object to a script.

        Printed immediately before the script's tag. Re-localizing the same
        object name replaces its data.
        """
        if not self.registry.is_registered(SCRIPT, handle):
            logger.warning(f"Cannot localize unregistered script '{handle}'")
            return False
        entries = self._localized.setdefault(handle, [])
        entries[:] = [(name, value) for name, value in entries if name != object_name]
        entries.append((object_name, data))
        return True

    def localized_data(self, handle: str) -> Dict[str, Any]:
        return dict(self._localized.get(handle, []))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @staticmethod
    def _json_for_script(data: Any) -> str:
        # "</script>" inside a string must not end the tag
        return json.dumps(data, default=str).replace("</", "<\\/")

    def _script_tags(self, handle: str) -> str:
        definition = self.registry.get(SCRIPT, handle)
        parts = []
        for object_name, data in self._localized.get(handle, []):
            parts.append(
                f'<script id="{html.escape(handle, quote=True)}-js-extra">\n'
                f"var {object_name} = {self._json_for_script(data)};\n"
                f"</script>"
            )
        parts.append(
            f'<script src="{html.escape(definition.url, quote=True)}" '
            f'id="{html.escape(handle, quote=True)}-js"></script>'
        )
        return "\n".join(parts)

    def render_head(self) -> str:
        """Stylesheet links and head scripts."""
        parts = []
        for handle in self._queues[STYLE]:
            definition = self.registry.get(STYLE, handle)
            parts.append(
                f'<link rel="stylesheet" id="{html.escape(handle, quote=True)}-css" '
                f'href="{html.escape(definition.url, quote=True)}" media="all" />'
            )
        for handle in self._queues[SCRIPT]:
            if not self.registry.get(SCRIPT, handle).in_footer:
                parts.append(self._script_tags(handle))
        return "\n".join(parts)

    def render_footer(self) -> str:
        """Footer scripts, each preceded by its localized data."""
        return "\n".join(
            self._script_tags(handle)
            for handle in self._queues[SCRIPT]
            if self.registry.get(SCRIPT, handle).in_footer
        )
