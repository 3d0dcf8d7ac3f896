"""
Shortcode tests: tag parsing, expansion and [site-directory] dispatch.
"""

import pytest

from shortcodes import ShortcodeRegistry, parse_shortcode_attrs


class TestParseShortcodeAttrs:

    def test_named_and_positional(self):
        attrs = parse_shortcode_attrs(' display="list" style=\'a:b\' logo_size=thumbnail show_site_logo')
        assert attrs == {
            "display": "list",
            "style": "a:b",
            "logo_size": "thumbnail",
            0: "show_site_logo",
        }

    def test_names_lowercased(self):
        assert parse_shortcode_attrs('DISPLAY="map"') == {"display": "map"}

    def test_non_breaking_space_separates(self):
        assert parse_shortcode_attrs('display="list" style="x"') == {"display": "list", "style": "x"}

    def test_empty(self):
        assert parse_shortcode_attrs("") == {}


class TestShortcodeRegistry:

    @pytest.fixture
    def echo_registry(self):
        registry = ShortcodeRegistry()
        registry.register("echo", lambda atts, content, context: f"<{atts.get('word', '')}|{content}>")
        return registry

    def test_expands_self_closing_and_enclosing(self, echo_registry, make_context):
        text = 'a [echo word="hi" /] b [echo]inner[/echo] c'
        assert echo_registry.do_shortcode(text, make_context()) == "a <hi|None> b <|inner> c"

    def test_escaped_tag_printed_literally(self, echo_registry, make_context):
        assert echo_registry.do_shortcode("[[echo]]", make_context()) == "[echo]"

    def test_unregistered_tags_left_alone(self, echo_registry, make_context):
        assert echo_registry.do_shortcode("[other x=1]", make_context()) == "[other x=1]"

    def test_longer_tag_name_not_matched(self, echo_registry, make_context):
        assert echo_registry.do_shortcode("[echo-two]", make_context()) == "[echo-two]"

    def test_literal_filter_applies_outside_output(self, echo_registry, make_context):
        html = echo_registry.do_shortcode("<i>[echo word=x]</i>", make_context(), literal_filter=str.upper)
        assert html == "<I><x|None></I>"

    def test_duplicate_and_invalid_tags_rejected(self, echo_registry):
        with pytest.raises(ValueError):
            echo_registry.register("echo", lambda *a: "")
        with pytest.raises(ValueError):
            echo_registry.register("bad tag", lambda *a: "")

    def test_unknown_handler(self, echo_registry):
        with pytest.raises(ValueError):
            echo_registry.get_handler("missing")


class TestSiteDirectoryShortcode:

    def test_registration_declares_assets(self, registries):
        shortcodes, assets = registries
        assert shortcodes.tags() == ["site-directory"]
        assert set(assets.handles("script")) == {"multisite-directory-map", "leaflet", "jquery"}
        assert set(assets.handles("style")) == {"multisite-directory-map", "leaflet"}

    def test_registration_enqueues_nothing(self, make_context):
        context = make_context()
        assert context.assets.enqueued_scripts == []
        assert context.assets.enqueued_styles == []

    def test_invocations_get_sequential_ids(self, registries, make_context):
        context = make_context()
        html = registries[0].do_shortcode("[site-directory][site-directory]", context)
        assert 'id="site-directory-0"' in html
        assert 'id="site-directory-1"' in html
        data = context.assets.localized_data("multisite-directory-map")
        assert "multisite_directory_site_directory_0" in data
        assert "multisite_directory_site_directory_1" in data

    def test_list_display(self, registries, make_context):
        html = registries[0].do_shortcode('[site-directory display="list"]', make_context())
        assert html.startswith('<ul class="network-directory-sites">')

    def test_enclosed_content_becomes_noscript(self, registries, make_context):
        html = registries[0].do_shortcode("[site-directory]Member <b>sites</b>[/site-directory]", make_context())
        assert "<noscript>Member &lt;b&gt;sites&lt;/b&gt;</noscript>" in html

    def test_not_multisite_renders_nothing_but_counts(self, registries, make_context):
        context = make_context(multisite=False)
        assert registries[0].do_shortcode("[site-directory]", context) == ""
        assert context.invocations == 1
        assert context.assets.enqueued_scripts == []

    def test_invalid_attributes_render_nothing(self, registries, make_context):
        context = make_context()
        html = registries[0].do_shortcode(
            '[site-directory display="grid"] [site-directory]', context
        )
        # The failed invocation still used index 0
        assert 'id="site-directory-1"' in html
        assert html.startswith(" ")

    def test_bad_tax_query_renders_nothing(self, registries, make_context):
        text = '[site-directory site_category_in="alpha" query_args="%7B%22tax_query%22%3A%22x%22%7D"]'
        assert registries[0].do_shortcode(text, make_context()) == ""

    def test_escaped_tag_does_not_invoke(self, registries, make_context):
        context = make_context()
        assert registries[0].do_shortcode("[[site-directory]]", context) == "[site-directory]"
        assert context.invocations == 0
