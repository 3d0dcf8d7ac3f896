"""
Shortcode attribute parsing tests: defaults, JSON decoding, category merge.
"""

import json
from urllib.parse import quote

import pytest

from core.attributes import (
    parse_json_attribute,
    parse_shortcode_attributes,
    split_category_slugs,
)
from core.models import DisplayMode
from exceptions import InvalidInputError

TAXONOMY = "site_directory_category"


class TestDefaults:

    @pytest.mark.parametrize("atts", ["", None, {}])
    def test_no_attributes_gives_defaults(self, atts):
        options = parse_shortcode_attributes(atts)
        assert options.display == DisplayMode.MAP
        assert options.style == ""
        assert options.show_site_logo is False
        assert options.logo_size == (72, 72)
        assert options.query_args == {}
        assert options.query_terms is None

    def test_unknown_attributes_ignored(self):
        options = parse_shortcode_attributes({"colour": "red", "display": "list"})
        assert options.display == DisplayMode.LIST


class TestValueDecoding:

    def test_plain_text_kept_verbatim(self):
        assert parse_json_attribute("height:400px") == "height:400px"

    def test_url_encoded_json_decoded(self):
        raw = quote('{"numberposts": 5, "orderby": "title"}')
        assert parse_json_attribute(raw) == {"numberposts": 5, "orderby": "title"}

    def test_query_string_value_not_decoded_twice(self):
        assert parse_json_attribute('{"search": "a+b"}', url_encoded=False) == {"search": "a+b"}
        assert parse_json_attribute('{"search": "a+b"}') == {"search": "a b"}

    def test_query_string_attributes(self):
        options = parse_shortcode_attributes(
            {"query_args": '{"search": "50%+off"}'}, url_encoded=False
        )
        assert options.query_args == {"search": "50%+off"}

    def test_non_json_constant_kept_as_text(self):
        assert parse_json_attribute("NaN") == "NaN"

    def test_non_string_passes_through(self):
        assert parse_json_attribute([1, 2]) == [1, 2]

    def test_numeric_style_becomes_text(self):
        options = parse_shortcode_attributes({"style": "12"})
        assert options.style == "12"

    def test_display_normalized(self):
        options = parse_shortcode_attributes({"display": " LIST "})
        assert options.display == DisplayMode.LIST

    def test_invalid_display_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_shortcode_attributes({"display": "grid"})


class TestShowSiteLogo:

    def test_positional_flag_turns_on(self):
        options = parse_shortcode_attributes({0: "show_site_logo"})
        assert options.show_site_logo is True

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("0", False), ("false", False)])
    def test_named_values(self, value, expected):
        options = parse_shortcode_attributes({"show_site_logo": value})
        assert options.show_site_logo is expected


class TestLogoSize:

    def test_named_size(self):
        assert parse_shortcode_attributes({"logo_size": "thumbnail"}).logo_size == "thumbnail"

    def test_json_pair(self):
        assert parse_shortcode_attributes({"logo_size": "[10, 20]"}).logo_size == (10, 20)

    def test_three_dimensions_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_shortcode_attributes({"logo_size": "[1, 2, 3]"})


class TestSiteCategoryIn:

    def test_split_trims_and_drops_empties(self):
        assert split_category_slugs(" north, south,, ") == ["north", "south"]

    def test_builds_tax_query_and_term_filter(self):
        options = parse_shortcode_attributes({"site_category_in": "north,south"}, taxonomy=TAXONOMY)
        assert options.query_args == {
            "tax_query": [{
                "taxonomy": TAXONOMY,
                "field": "slug",
                "terms": ["north", "south"],
                "operator": "IN",
            }]
        }
        assert options.query_terms == {"slug": ["north", "south"]}
        assert options.category_slugs == ["north", "south"]
        assert options.term_query_args["slug"] == ["north", "south"]

    def test_appends_to_existing_tax_query(self):
        existing = {"taxonomy": TAXONOMY, "field": "slug", "terms": ["east"], "operator": "NOT IN"}
        raw = quote('{"tax_query": [%s]}' % json.dumps(existing))
        options = parse_shortcode_attributes(
            {"site_category_in": "north", "query_args": raw}, taxonomy=TAXONOMY
        )
        tax_query = options.query_args["tax_query"]
        assert tax_query[0] == existing
        assert tax_query[1]["terms"] == ["north"]
        # Existing tax_query means no derived query_terms, categories are still narrowed
        assert options.query_terms is None
        assert options.category_slugs == ["north"]
        assert options.term_query_args["slug"] == ["north"]
        assert options.term_query_args["tax_query"] == tax_query

    def test_empty_tax_query_still_narrows_categories(self):
        raw = quote('{"tax_query": []}')
        options = parse_shortcode_attributes(
            {"site_category_in": "beta", "query_args": raw}, taxonomy=TAXONOMY
        )
        assert options.query_terms is None
        assert options.term_query_args["slug"] == ["beta"]
        assert options.query_args["tax_query"][0]["terms"] == ["beta"]

    def test_non_list_tax_query_rejected(self):
        raw = quote('{"tax_query": "north"}')
        with pytest.raises(InvalidInputError):
            parse_shortcode_attributes({"site_category_in": "north", "query_args": raw})

    def test_numeric_slug(self):
        options = parse_shortcode_attributes({"site_category_in": "2024"})
        assert options.query_terms == {"slug": ["2024"]}

    def test_empty_slug_list_leaves_query_args_alone(self):
        options = parse_shortcode_attributes({"site_category_in": " , "})
        assert options.query_args == {}
        assert options.query_terms is None

    def test_query_args_without_category_untouched(self):
        raw = quote('{"tax_query": "anything"}')
        options = parse_shortcode_attributes({"query_args": raw})
        assert options.query_args == {"tax_query": "anything"}
