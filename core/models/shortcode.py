# ============================================================================
# SHORTCODE OPTION MODELS
# ============================================================================
# STATUS: Core - typed per-render options for the site-directory shortcode
# PURPOSE: Replace loosely-shaped shortcode attributes with a validated model
# EXPORTS: DisplayMode, LogoSize, ShortcodeOptions
# DEPENDENCIES: pydantic
# ============================================================================
"""
Shortcode Option Models.

Every attribute gets an explicit decode-or-default rule here. The raw
string/JSON decoding and the site_category_in merge happen in
core.attributes before these validators run.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.defaults import ShortcodeDefaults


class DisplayMode(str, Enum):
    """How the directory is displayed."""
    LIST = "list"
    MAP = "map"


# Named image size ("thumbnail") or explicit (width, height)
LogoSize = Union[str, Tuple[int, int]]


def _scalar_to_text(value: Any) -> Any:
    """JSON decoding turns "12" into 12; text fields want it back."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ShortcodeOptions(BaseModel):
    """
    Options for one shortcode invocation.

    Invariant: when site_category_in is set, query_args["tax_query"] holds
    the matching slug constraint (see core.attributes).
    """
    model_config = ConfigDict(use_enum_values=False, extra='ignore')

    display: DisplayMode = Field(default=DisplayMode(ShortcodeDefaults.DISPLAY))
    style: str = Field(default=ShortcodeDefaults.STYLE)
    show_site_logo: bool = Field(default=ShortcodeDefaults.SHOW_SITE_LOGO)
    logo_size: LogoSize = Field(default=ShortcodeDefaults.LOGO_SIZE)
    query_args: Dict[str, Any] = Field(default_factory=dict)
    site_category_in: str = Field(default="")

    # Slugs from site_category_in, whichever way they were merged into query_args
    category_slugs: List[str] = Field(default_factory=list)
    # Term-level filter derived from site_category_in when no tax_query was given
    query_terms: Optional[Dict[str, List[str]]] = None

    @field_validator("display", mode="before")
    @classmethod
    def validate_display(cls, v: Any) -> Any:
        if isinstance(v, DisplayMode):
            return v
        if isinstance(v, str):
            return v.strip().lower()
        raise ValueError(f"display must be 'list' or 'map', was {type(v).__name__}")

    @field_validator("style", "site_category_in", mode="before")
    @classmethod
    def validate_text(cls, v: Any) -> Any:
        v = _scalar_to_text(v)
        if not isinstance(v, str):
            raise ValueError(f"expected text, was {type(v).__name__}")
        return v

    @field_validator("show_site_logo", mode="before")
    @classmethod
    def validate_flag(cls, v: Any) -> bool:
        # Presence/truthiness semantics: "1", "true", "yes" on; "", 0, false off
        return bool(v)

    @field_validator("logo_size", mode="before")
    @classmethod
    def validate_logo_size(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return ShortcodeDefaults.LOGO_SIZE
            return v
        if isinstance(v, (list, tuple)) and len(v) == 2:
            try:
                width, height = (int(float(d)) for d in v)
            except (TypeError, ValueError) as e:
                raise ValueError(f"logo_size dimensions must be numbers, was {v!r}") from e
            if width < 0 or height < 0:
                raise ValueError(f"logo_size dimensions must be positive, was {v!r}")
            return (width, height)
        raise ValueError(f"logo_size must be a size name or [width, height], was {v!r}")

    @field_validator("query_args", mode="before")
    @classmethod
    def validate_query_args(cls, v: Any) -> Any:
        if v is None or v == "" or v == []:
            return {}
        if not isinstance(v, dict):
            raise ValueError(f"query_args must be a JSON object, was {type(v).__name__}")
        return v

    @property
    def is_map(self) -> bool:
        return self.display == DisplayMode.MAP

    @property
    def term_query_args(self) -> Dict[str, Any]:
        """
        Filter used to select categories.

        query_args with the site_category_in slugs as a term slug filter,
        whether or not query_args already carried a tax_query.
        """
        if not self.category_slugs:
            return self.query_args
        return {**self.query_args, **(self.query_terms or {}), 'slug': list(self.category_slugs)}
