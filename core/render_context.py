"""
Render Context.

State shared by all shortcode invocations on one page: the site being
viewed, whether the host runs as a network, the invocation counter used for
container ids, and the page's enqueued assets.

Exports:
    RenderContext: Per-page render state
"""

from dataclasses import dataclass, field
from typing import Optional

from util_logger import LogContext
from .assets import AssetRegistry, PageAssets


@dataclass
class RenderContext:
    """
    Explicit per-page state passed to every shortcode invocation.

    Usage:
        context = RenderContext(current_site_id=3, assets=PageAssets(registry))
        index = context.next_invocation()   # 0, then 1, ...
    """
    current_site_id: int
    assets: PageAssets
    multisite: bool = True
    request_id: Optional[str] = None
    invocations: int = field(default=0)

    @classmethod
    def for_page(
        cls,
        current_site_id: int,
        registry: AssetRegistry,
        multisite: bool = True,
        request_id: Optional[str] = None
    ) -> "RenderContext":
        return cls(
            current_site_id=current_site_id,
            assets=PageAssets(registry),
            multisite=multisite,
            request_id=request_id,
        )

    def next_invocation(self) -> int:
        """Zero-based index of this invocation; advances the counter."""
        index = self.invocations
        self.invocations += 1
        return index

    def log_context(self, directory_site_id: Optional[int] = None,
                    invocation: Optional[int] = None,
                    shortcode: Optional[str] = None) -> LogContext:
        return LogContext(
            site_id=self.current_site_id,
            directory_site_id=directory_site_id,
            shortcode=shortcode,
            invocation=invocation,
            request_id=self.request_id,
        )
