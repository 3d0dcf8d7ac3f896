"""
GeoJSON Builder.

Turns geo-tagged directory categories into the FeatureCollection the map
script renders. Term meta stores positions as "latitude,longitude"; GeoJSON
positions are [longitude, latitude], so every stored pair is swapped.

Exports:
    geo_string_to_position: "lat,lng" -> [lng, lat]
    build_feature_collection: Categories -> FeatureCollection
"""

from typing import Any, Dict, Iterable, List, Optional

from core.models import (
    CategoryTerm,
    Feature,
    FeatureCollection,
    FeatureProperties,
    LogoSize,
    PointGeometry,
    SiteMeta,
    SiteSummary,
)
from util_logger import LoggerFactory, ComponentType
from .directory_service import DirectoryService

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "GeoJSONBuilder")


def _to_number(text: str) -> Any:
    try:
        return float(text)
    except ValueError:
        return text


def geo_string_to_position(geo: Any) -> Any:
    """
    Convert a stored "latitude,longitude" string to a GeoJSON position.

    Non-string values are returned unchanged (already structured). Numeric
    parts become floats; anything else is kept as the trimmed text.

    Example:
        geo_string_to_position("42.36,-71.06")  # [-71.06, 42.36]
    """
    if not isinstance(geo, str):
        return geo
    parts = [part.strip() for part in geo.split(',')]
    if len(parts) < 2:
        logger.warning(f"Geo value {geo!r} is not a 'lat,lng' pair")
        return [_to_number(parts[0]), None]
    latitude, longitude = parts[0], parts[1]
    return [_to_number(longitude), _to_number(latitude)]


def _site_summaries(service: DirectoryService, term: CategoryTerm, logo_size: LogoSize,
                    query_args: Optional[Dict[str, Any]]) -> List[SiteSummary]:
    summaries = []
    for entry in service.list_entries_by_term(term, query_args):
        summaries.append(SiteSummary(
            post_name=entry.post_name,
            post_title=entry.post_title,
            post_excerpt=entry.post_excerpt,
            post_content=entry.post_content,
            meta=SiteMeta(
                siteurl=service.get_site_permalink(entry.blog_id),
                sitelogo=service.get_site_logo(entry.blog_id, logo_size),
            ),
        ))
    return summaries


def build_feature_collection(
    service: DirectoryService,
    terms: Iterable[CategoryTerm],
    logo_size: LogoSize,
    query_args: Optional[Dict[str, Any]] = None
) -> FeatureCollection:
    """
    One Point feature per category, listing the sites filed under it.

    Args:
        service: Directory query layer
        terms: Geo-tagged categories
        logo_size: Size of the logo markup attached to each site
        query_args: Entry filter ANDed with each category, as in the list view

    Returns:
        FeatureCollection
    """
    features = []
    for term in terms:
        if not term.is_mappable:
            logger.debug(f"Category {term.slug} has an empty geo value, skipping")
            continue
        features.append(Feature(
            geometry=PointGeometry(coordinates=geo_string_to_position(term.geo)),
            properties=FeatureProperties(
                id=term.term_id,
                name=term.name,
                slug=term.slug,
                sites=_site_summaries(service, term, logo_size, query_args),
            ),
        ))
    logger.debug(f"Built FeatureCollection with {len(features)} features")
    return FeatureCollection(features=features)
