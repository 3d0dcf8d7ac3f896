"""
Core Directory Components.

Structure:
    models/: Pure data structures (no business logic)
    attributes.py: Shortcode attribute decoding into ShortcodeOptions
    render_context.py: Per-page render state (invocations, assets)
    assets.py: Script/style registry and per-page enqueueing
"""

from . import models

__all__ = ['models']
