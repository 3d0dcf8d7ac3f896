"""
Logo and escaping tests: rendition choice, <img> markup, URL cleaning.
"""

import pytest

from config import ImageSizeDefaults
from core.models import ImageAttachment, SiteDetails
from services.logo import (
    constrain_dimensions,
    custom_logo_html,
    featured_image_html,
    select_rendition,
)
from services.markup import esc_attr, esc_html, esc_url
from tests.factories.directory_factories import make_image, make_site

SIZES = dict(ImageSizeDefaults.SIZES)


class TestConstrainDimensions:

    def test_scales_into_box(self):
        assert constrain_dimensions(300, 150, 72, 72) == (72, 36)

    def test_never_scales_up(self):
        assert constrain_dimensions(50, 40, 72, 72) == (50, 40)

    def test_unbounded_box(self):
        assert constrain_dimensions(300, 150, 0, 0) == (300, 150)

    def test_single_bound(self):
        assert constrain_dimensions(400, 200, 100, 0) == (100, 50)


class TestSelectRendition:

    @pytest.fixture
    def image(self):
        return ImageAttachment(**make_image(1200, 800, sizes={"thumbnail": (150, 150), "medium": (300, 200)}))

    def test_named_rendition(self, image):
        url, width, height, name = select_rendition(image, "thumbnail", SIZES)
        assert (url, width, height, name) == (image.sizes["thumbnail"].url, 150, 150, "thumbnail")

    def test_registered_name_without_rendition_scales_original(self, image):
        url, width, height, _ = select_rendition(image, "large", SIZES)
        assert url == image.url
        assert (width, height) == (1024, 683)

    def test_unknown_name_uses_original(self, image):
        assert select_rendition(image, "full", SIZES)[:3] == (image.url, 1200, 800)

    def test_box_uses_smallest_covering_rendition(self, image):
        url, width, height, name = select_rendition(image, (72, 72), SIZES)
        assert url == image.sizes["thumbnail"].url
        assert (width, height, name) == (72, 72, "72x72")

    def test_box_larger_than_renditions_uses_original(self, image):
        url, width, height, _ = select_rendition(image, (400, 400), SIZES)
        assert url == image.url
        assert (width, height) == (400, 267)


class TestImageMarkup:

    def test_featured_image(self):
        image = ImageAttachment(**make_image(sizes={"thumbnail": (150, 150)}))
        html = featured_image_html(image, (72, 72), SIZES)
        assert 'class="attachment-72x72 size-72x72 wp-post-image"' in html
        assert 'width="72" height="72"' in html
        assert f'alt="{esc_attr(image.alt)}"' in html

    def test_no_image(self):
        assert featured_image_html(None, "thumbnail", SIZES) == ""

    def test_custom_logo_links_home(self):
        site = SiteDetails(**make_site(4, custom_logo=make_image(512, 256, alt="")))
        html = custom_logo_html(site)
        assert html.startswith(f'<a href="{site.siteurl}" class="custom-logo-link" rel="home">')
        assert 'class="custom-logo"' in html
        # Empty alt falls back to the site name
        assert f'alt="{esc_attr(site.blogname)}"' in html

    def test_site_without_logo(self):
        assert custom_logo_html(SiteDetails(**make_site(2))) == ""
        assert custom_logo_html(None) == ""


class TestEscaping:

    def test_esc_html(self):
        assert esc_html('<a href="x">\'') == "&lt;a href=&quot;x&quot;&gt;&#x27;"
        assert esc_html(None) == ""

    def test_esc_url_keeps_http(self):
        assert esc_url("https://a.example/?a=1&b=2") == "https://a.example/?a=1&amp;b=2"

    @pytest.mark.parametrize("url", [
        "javascript:alert(1)",
        "java\tscript:alert(1)",
        " JavaScript:alert(1)",
        "data:text/html;base64,AAAA",
    ])
    def test_esc_url_drops_unsafe_schemes(self, url):
        assert esc_url(url) == ""

    def test_esc_url_relative_and_spaces(self):
        assert esc_url("/my site/") == "/my%20site/"

    def test_esc_url_empty(self):
        assert esc_url(None) == ""
        assert esc_url("   ") == ""
