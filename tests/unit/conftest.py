"""
Unit test fixtures: a small directory tenant built from factories.

Scenario (directory tenant = site 1):

    Alpha  (geo "10.5,20.25")   entries: site 2, site 3
    Beta   (geo "-33.9, 151.2") entries: site 3
    Delta  (geo "1,2")          entries: site 2 (draft only)
    Gamma  (no geo)             entries: site 4

Site 3's entry has a featured image; site 4 has a custom logo.
"""

from datetime import datetime, timezone

import pytest

from tests.factories.directory_factories import (
    ALPHA,
    BETA,
    DELTA,
    GAMMA,
    build_repository,
    make_entry,
    make_image,
    make_site,
    make_term,
)


@pytest.fixture
def directory_records():
    """Raw site, term and entry dicts of the scenario."""
    sites = [
        make_site(1, is_main_site=True),
        make_site(2),
        make_site(3),
        make_site(4, custom_logo=make_image(512, 256)),
    ]
    terms = [
        make_term(ALPHA, "Alpha", geo="10.5,20.25"),
        make_term(BETA, "Beta", geo="-33.9, 151.2"),
        make_term(GAMMA, "Gamma"),
        make_term(DELTA, "Delta", geo="1,2"),
    ]
    entries = [
        make_entry(100, 2, [ALPHA], post_date=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        make_entry(101, 3, [ALPHA, BETA],
                   thumbnail=make_image(sizes={"thumbnail": (150, 150), "medium": (300, 200)})),
        make_entry(102, 4, [GAMMA]),
        make_entry(103, 2, [DELTA], post_status="draft",
                   post_date=datetime(2023, 1, 1, tzinfo=timezone.utc)),
    ]
    return {"sites": sites, "terms": terms, "entries": entries}


@pytest.fixture
def repository(directory_records):
    return build_repository(
        directory_records["sites"],
        directory_records["terms"],
        directory_records["entries"],
        networks={1: 1},
    )


@pytest.fixture
def app_config():
    from config import AppConfig
    return AppConfig()


@pytest.fixture
def service(repository, app_config):
    from services import DirectoryService
    return DirectoryService(repository=repository, config=app_config)


@pytest.fixture
def registries(app_config, service):
    """Fresh (ShortcodeRegistry, AssetRegistry) rendering through the scenario."""
    from shortcodes import create_registries
    return create_registries(config=app_config, service=service)


@pytest.fixture
def make_context(registries):
    """Factory fixture: RenderContext for a page of the given site."""
    from core.render_context import RenderContext

    def _make(current_site_id: int = 1, multisite: bool = True):
        return RenderContext.for_page(current_site_id, registries[1], multisite=multisite)
    return _make
