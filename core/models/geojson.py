"""
GeoJSON Pydantic models.

Feature collection handed to the client-side map script. One Point feature
per mappable category, each listing the sites filed under it.

Exports:
    PointGeometry: GeoJSON Point
    SiteMeta: Resolved permalink and logo markup of a site
    SiteSummary: Directory entry fields exposed to the map popup
    FeatureProperties: Category details plus its sites
    Feature: GeoJSON Feature
    FeatureCollection: GeoJSON FeatureCollection
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field


class PointGeometry(BaseModel):
    """
    GeoJSON Point.

    Positions are [longitude, latitude]. Pre-structured geo values from the
    term store are passed through untouched, hence Any.
    """
    type: Literal["Point"] = Field(default="Point")
    coordinates: Any = Field(
        description="GeoJSON Position, longitude first"
    )


class SiteMeta(BaseModel):
    siteurl: str = Field(default="", description="Member site permalink")
    sitelogo: str = Field(default="", description="Logo markup, empty when the site has none")


class SiteSummary(BaseModel):
    """Directory entry fields shown in the map popup."""
    post_name: str = ""
    post_title: str = ""
    post_excerpt: str = ""
    post_content: str = ""
    meta: SiteMeta = Field(default_factory=SiteMeta)


class FeatureProperties(BaseModel):
    id: int = Field(description="Category term id")
    name: str
    slug: str
    sites: List[SiteSummary] = Field(default_factory=list)


class Feature(BaseModel):
    type: Literal["Feature"] = Field(default="Feature")
    geometry: PointGeometry
    properties: FeatureProperties


class FeatureCollection(BaseModel):
    """
    GeoJSON FeatureCollection of mappable directory categories.
    """
    type: Literal["FeatureCollection"] = Field(
        default="FeatureCollection",
        description="GeoJSON type"
    )
    features: List[Feature] = Field(
        default_factory=list,
        description="One Point feature per geo-tagged category"
    )

    def to_geojson(self) -> Dict[str, Any]:
        """Plain dict ready for json.dumps."""
        return self.model_dump(mode="json")
