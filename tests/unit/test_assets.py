"""
Asset registry tests: declaration, dependency-ordered enqueueing,
localized script data.
"""

import pytest

from core.assets import AssetRegistry, PageAssets


@pytest.fixture
def asset_registry():
    registry = AssetRegistry()
    registry.register_script("lib", "https://cdn.example.org/lib.js")
    registry.register_script("plugin", "/static/plugin.js", deps=["lib"], in_footer=True)
    registry.register_script("app", "/static/app.js?x=1", deps=["plugin", "lib"],
                             version="2.0", in_footer=True)
    registry.register_style("app", "/static/app.css")
    return registry


class TestAssetRegistry:

    def test_first_registration_wins(self, asset_registry):
        assert asset_registry.register_script("lib", "/other.js") is False
        assert asset_registry.get("script", "lib").src == "https://cdn.example.org/lib.js"

    def test_scripts_and_styles_are_separate(self, asset_registry):
        assert asset_registry.handles("script") == ["lib", "plugin", "app"]
        assert asset_registry.handles("style") == ["app"]

    def test_version_query(self, asset_registry):
        assert asset_registry.get("script", "app").url == "/static/app.js?x=1&ver=2.0"
        assert asset_registry.get("style", "app").url == "/static/app.css"


class TestPageAssets:

    def test_dependencies_enqueued_first(self, asset_registry):
        page = PageAssets(asset_registry)
        assert page.enqueue_script("app") is True
        assert page.enqueued_scripts == ["lib", "plugin", "app"]

    def test_enqueue_is_idempotent(self, asset_registry):
        page = PageAssets(asset_registry)
        page.enqueue_script("plugin")
        page.enqueue_script("plugin")
        assert page.enqueued_scripts == ["lib", "plugin"]

    def test_unregistered_handle(self, asset_registry):
        page = PageAssets(asset_registry)
        assert page.enqueue_style("missing") is False
        assert page.enqueued_styles == []

    def test_status_checks(self, asset_registry):
        page = PageAssets(asset_registry)
        page.enqueue_style("app")
        assert page.style_is("app")
        assert not page.script_is("app")
        assert page.script_is("app", "registered")
        with pytest.raises(ValueError):
            page.script_is("app", "printed")

    def test_pages_do_not_share_state(self, asset_registry):
        first = PageAssets(asset_registry)
        first.enqueue_script("app")
        assert PageAssets(asset_registry).enqueued_scripts == []


class TestLocalizedData:

    def test_unregistered_script_rejected(self, asset_registry):
        page = PageAssets(asset_registry)
        assert page.localize_script("missing", "data", {}) is False
        assert page.localized_data("missing") == {}

    def test_relocalizing_replaces(self, asset_registry):
        page = PageAssets(asset_registry)
        page.localize_script("app", "settings", {"zoom": 1})
        page.localize_script("app", "strings", {"hello": "hi"})
        page.localize_script("app", "settings", {"zoom": 4})
        assert page.localized_data("app") == {"strings": {"hello": "hi"}, "settings": {"zoom": 4}}

    def test_script_close_tag_escaped(self, asset_registry):
        page = PageAssets(asset_registry)
        page.enqueue_script("app")
        page.localize_script("app", "payload", {"html": "</script><script>alert(1)"})
        footer = page.render_footer()
        assert "</script><script>alert(1)" not in footer
        assert "<\\/script>" in footer


class TestOutput:

    def test_head_and_footer_split(self, asset_registry):
        page = PageAssets(asset_registry)
        page.enqueue_style("app")
        page.enqueue_script("app")

        head = page.render_head()
        assert '<link rel="stylesheet" id="app-css" href="/static/app.css" media="all" />' in head
        assert 'src="https://cdn.example.org/lib.js" id="lib-js"' in head
        assert "plugin.js" not in head

        footer = page.render_footer()
        assert footer.index('id="plugin-js"') < footer.index('id="app-js"')
        assert 'src="/static/app.js?x=1&amp;ver=2.0"' in footer

    def test_data_printed_before_its_script(self, asset_registry):
        page = PageAssets(asset_registry)
        page.enqueue_script("plugin")
        page.localize_script("plugin", "plugin_data", {"a": [1, 2]})
        footer = page.render_footer()
        assert footer.startswith('<script id="plugin-js-extra">\nvar plugin_data = {"a": [1, 2]};\n</script>')
        assert footer.endswith('<script src="/static/plugin.js" id="plugin-js"></script>')

    def test_nothing_enqueued(self, asset_registry):
        page = PageAssets(asset_registry)
        assert page.render_head() == ""
        assert page.render_footer() == ""
