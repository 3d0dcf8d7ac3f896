# ============================================================================
# SHORTCODE ATTRIBUTE PARSER
# ============================================================================
# STATUS: Core - boundary between raw tag attributes and ShortcodeOptions
# PURPOSE: Decode URL-encoded JSON attributes, apply defaults, merge category filter
# EXPORTS: parse_json_attribute, split_category_slugs, build_category_constraint, parse_shortcode_attributes
# DEPENDENCIES: pydantic, core.models.shortcode
# ============================================================================
"""
Shortcode Attribute Parser.

Some attributes (query_args, logo_size) are passed as URL-encoded JSON:

    [site-directory display="list" query_args="%7B%22hide_empty%22%3Atrue%7D"]

Each value is URL-decoded and JSON-decoded; values that are not JSON stay
exactly as written. The decoded values are merged onto the defaults and
validated into ShortcodeOptions.
"""

import copy
import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import unquote_plus

from pydantic import ValidationError

from config.defaults import AppDefaults, ShortcodeDefaults
from exceptions import InvalidInputError
from core.models.shortcode import ShortcodeOptions

logger = logging.getLogger(__name__)


# Recognized attribute names and their defaults
DEFAULT_ATTRIBUTES: Dict[str, Any] = {
    'display': ShortcodeDefaults.DISPLAY,
    'style': ShortcodeDefaults.STYLE,
    'show_site_logo': ShortcodeDefaults.SHOW_SITE_LOGO,
    'logo_size': ShortcodeDefaults.LOGO_SIZE,
    'query_args': {},
    'site_category_in': '',
}

# Attributes that may be given positionally: [site-directory show_site_logo]
FLAG_ATTRIBUTES = frozenset({'show_site_logo'})


def _reject_constant(name: str) -> Any:
    # NaN/Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


def parse_json_attribute(value: Any, url_encoded: bool = True) -> Any:
    """
    Decode one shortcode attribute value.

    Args:
        value: Raw attribute value
        url_encoded: Tag attributes are URL-encoded JSON; values taken from
                     an HTTP query string were already decoded once

    Returns:
        The decoded JSON value, or the original value when it is not
        (URL-encoded) JSON.
    """
    if not isinstance(value, str):
        return value
    try:
        text = unquote_plus(value) if url_encoded else value
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return value


def split_category_slugs(value: str) -> List[str]:
    """Comma-separated slug list, whitespace trimmed, empties dropped."""
    return [slug.strip() for slug in value.split(',') if slug.strip()]


def build_category_constraint(slugs: List[str], taxonomy: str) -> Dict[str, Any]:
    """Taxonomy constraint selecting entries filed under any of the slugs."""
    return {
        'taxonomy': taxonomy,
        'field': 'slug',
        'terms': list(slugs),
        'operator': 'IN',
    }


def _normalize_attributes(atts: Optional[Union[Mapping[Any, Any], str]],
                          url_encoded: bool = True) -> Dict[str, Any]:
    """Decode values and fold positional flags into named attributes."""
    if not atts:
        return {}
    if isinstance(atts, str):
        # The host hands over an empty string when a tag has no attributes
        return {}

    decoded: Dict[str, Any] = {}
    for key, value in atts.items():
        if isinstance(key, int) or (isinstance(key, str) and key.isdigit()):
            if isinstance(value, str) and value.lower() in FLAG_ATTRIBUTES:
                decoded[value.lower()] = True
            continue
        decoded[str(key).lower()] = parse_json_attribute(value, url_encoded)
    return decoded


def parse_shortcode_attributes(
    atts: Optional[Union[Mapping[Any, Any], str]],
    taxonomy: str = AppDefaults.DIRECTORY_TAXONOMY,
    url_encoded: bool = True
) -> ShortcodeOptions:
    """
    Build ShortcodeOptions from raw shortcode attributes.

    Args:
        atts: Attribute mapping as parsed from the tag (string values,
              integer keys for positional attributes), or "" when none
        taxonomy: Directory category taxonomy used for site_category_in
        url_encoded: False for query string parameters, which must not be
                     URL-decoded a second time

    Returns:
        Validated ShortcodeOptions

    Raises:
        InvalidInputError: query_args.tax_query is not a list while
            site_category_in is set, or any attribute fails validation
    """
    decoded = _normalize_attributes(atts, url_encoded)

    unknown = sorted(set(decoded) - set(DEFAULT_ATTRIBUTES))
    if unknown:
        logger.debug(f"Ignoring unrecognized shortcode attributes: {unknown}")

    merged = {
        key: decoded.get(key, copy.deepcopy(default))
        for key, default in DEFAULT_ATTRIBUTES.items()
    }

    category_filter = merged['site_category_in']
    if isinstance(category_filter, (int, float)) and not isinstance(category_filter, bool):
        category_filter = str(category_filter)
    slugs = split_category_slugs(category_filter) if isinstance(category_filter, str) else []

    if slugs:
        query_args = merged['query_args']
        if query_args in (None, "", []):
            query_args = {}
        if not isinstance(query_args, dict):
            raise InvalidInputError(
                f"query_args must be a JSON object, was {type(query_args).__name__}"
            )
        query_args = copy.deepcopy(query_args)
        constraint = build_category_constraint(slugs, taxonomy)

        if query_args.get('tax_query') is not None:
            tax_query = query_args['tax_query']
            if not isinstance(tax_query, list):
                raise InvalidInputError(
                    f"tax_query must be of type array, was {type(tax_query).__name__}"
                )
            tax_query.append(constraint)
        else:
            query_args['tax_query'] = [constraint]
            merged['query_terms'] = {'slug': list(slugs)}

        merged['query_args'] = query_args
        merged['category_slugs'] = list(slugs)

    try:
        return ShortcodeOptions(**merged)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid shortcode attributes: {e}") from e
