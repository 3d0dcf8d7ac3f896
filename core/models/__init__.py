"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    CategoryTerm, DirectoryEntry, SiteDetails: Upstream store records
    ImageAttachment, ImageRendition: Featured images and logos
    DisplayMode, ShortcodeOptions: Per-invocation shortcode options
    FeatureCollection, Feature, ...: GeoJSON output for the map
"""

from .directory import (
    ImageRendition,
    ImageAttachment,
    CategoryTerm,
    DirectoryEntry,
    SiteDetails,
)

from .shortcode import (
    DisplayMode,
    LogoSize,
    ShortcodeOptions,
)

from .query import (
    MetaClause,
    TermQuery,
    TaxConstraint,
    EntryQuery,
)

from .geojson import (
    PointGeometry,
    SiteMeta,
    SiteSummary,
    FeatureProperties,
    Feature,
    FeatureCollection,
)

__all__ = [
    'ImageRendition',
    'ImageAttachment',
    'CategoryTerm',
    'DirectoryEntry',
    'SiteDetails',
    'DisplayMode',
    'LogoSize',
    'ShortcodeOptions',
    'MetaClause',
    'TermQuery',
    'TaxConstraint',
    'EntryQuery',
    'PointGeometry',
    'SiteMeta',
    'SiteSummary',
    'FeatureProperties',
    'Feature',
    'FeatureCollection',
]
