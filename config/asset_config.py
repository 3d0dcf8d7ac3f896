"""
Asset Configuration.

Where the map script/stylesheet and their vendor dependencies are served
from.

Exports:
    AssetConfig: Asset source locations
"""

import os
from pydantic import BaseModel, Field

from .defaults import AssetDefaults


class AssetConfig(BaseModel):
    """Source locations for the directory's front-end assets."""

    base_url: str = Field(
        default=AssetDefaults.ASSET_BASE_URL,
        description="Base URL that plugin-relative asset paths are joined onto"
    )
    leaflet_version: str = Field(
        default=AssetDefaults.LEAFLET_VERSION,
        description="Leaflet release loaded from the CDN"
    )
    leaflet_cdn_template: str = Field(
        default=AssetDefaults.LEAFLET_CDN_TEMPLATE,
        description="CDN base, formatted with {version}"
    )
    jquery_url: str = Field(
        default=AssetDefaults.JQUERY_URL,
        description="jQuery script URL"
    )

    def asset_url(self, relative_path: str) -> str:
        """Join a plugin-relative path onto base_url."""
        return f"{self.base_url.rstrip('/')}/{relative_path.lstrip('/')}"

    @property
    def leaflet_base(self) -> str:
        return self.leaflet_cdn_template.format(version=self.leaflet_version)

    @property
    def leaflet_js(self) -> str:
        return f"{self.leaflet_base}/leaflet.js"

    @property
    def leaflet_css(self) -> str:
        return f"{self.leaflet_base}/leaflet.css"

    @property
    def map_script_url(self) -> str:
        return self.asset_url(AssetDefaults.MAP_SCRIPT_PATH)

    @property
    def map_style_url(self) -> str:
        return self.asset_url(AssetDefaults.MAP_STYLE_PATH)

    @classmethod
    def from_environment(cls) -> "AssetConfig":
        return cls(
            base_url=os.environ.get("ASSET_BASE_URL", AssetDefaults.ASSET_BASE_URL),
            leaflet_version=os.environ.get("LEAFLET_VERSION", AssetDefaults.LEAFLET_VERSION),
            leaflet_cdn_template=os.environ.get("LEAFLET_CDN_TEMPLATE", AssetDefaults.LEAFLET_CDN_TEMPLATE),
            jquery_url=os.environ.get("JQUERY_URL", AssetDefaults.JQUERY_URL),
        )
