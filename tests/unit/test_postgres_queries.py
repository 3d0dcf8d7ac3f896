"""
PostgreSQL repository tests: query composition and error mapping.

No database: only the parameter lists of the composed queries and the
translation of driver errors are checked.
"""

import psycopg
import pytest
from psycopg import sql

from config import AppConfig
from core.models import EntryQuery, TermQuery
from exceptions import UpstreamQueryError
from infrastructure import postgresql
from infrastructure.postgresql import PostgreSQLDirectoryRepository

TAXONOMY = "site_directory_category"


@pytest.fixture
def pg_repository():
    return PostgreSQLDirectoryRepository(
        config=AppConfig(),
        connection_string="postgresql://directory@localhost:5432/directory",
    )


class TestTermQueryComposition:

    def test_default_query(self, pg_repository):
        composed, params = pg_repository.build_term_query(1, TermQuery())
        assert isinstance(composed, sql.Composed)
        assert params == [1, TAXONOMY]

    def test_filters_in_order(self, pg_repository):
        query = TermQuery(slug=["a"], include=[3], exclude=[4], number=5)
        _, params = pg_repository.build_term_query(7, query)
        assert params == [7, TAXONOMY, ["a"], [3], [4], 5]

    def test_geo_filter(self, pg_repository):
        _, params = pg_repository.build_term_query(1, TermQuery.from_args({}, geo_key="geo"))
        assert params == [1, TAXONOMY, "geo"]

    def test_search_and_like(self, pg_repository):
        query = TermQuery.from_args({
            "search": "bos",
            "meta_query": [{"key": "geo", "value": "42", "compare": "LIKE"}],
        })
        _, params = pg_repository.build_term_query(1, query)
        assert params == [1, TAXONOMY, "%bos%", "%bos%", "geo", "%42%"]


class TestEntryQueryComposition:

    def test_default_query_has_no_limit(self, pg_repository):
        _, params = pg_repository.build_entry_query(1, EntryQuery())
        assert params == [1, ["publish"]]

    def test_entry_for_site(self, pg_repository):
        query = EntryQuery(blog_id=5, post_status=["any"], numberposts=1)
        _, params = pg_repository.build_entry_query(1, query)
        assert params == [1, 5, 1]

    def test_required_constraint_terms_as_text(self, pg_repository):
        query = EntryQuery.from_args({}, extra_constraints=[{"terms": [10]}])
        _, params = pg_repository.build_entry_query(1, query)
        assert params == [1, ["publish"], TAXONOMY, ["10"]]

    def test_and_operator_counts_terms(self, pg_repository):
        query = EntryQuery.from_args({"tax_query": [
            {"field": "slug", "terms": ["b", "a"], "operator": "AND"},
        ]})
        _, params = pg_repository.build_entry_query(1, query)
        assert params == [1, ["publish"], TAXONOMY, ["a", "b"], 2]

    def test_exists_and_empty_in(self, pg_repository):
        query = EntryQuery.from_args({"tax_query": [
            {"relation": "OR"},
            {"operator": "EXISTS"},
            {"terms": []},
        ]})
        _, params = pg_repository.build_entry_query(1, query)
        assert params == [1, ["publish"], TAXONOMY]

    def test_limit_and_offset(self, pg_repository):
        _, params = pg_repository.build_entry_query(1, EntryQuery(numberposts=10, offset=20))
        assert params == [1, ["publish"], 10, 20]


class TestErrorMapping:

    def test_driver_error_becomes_upstream_error(self, pg_repository, monkeypatch):
        def refuse(*args, **kwargs):
            raise psycopg.OperationalError("connection refused")

        monkeypatch.setattr(postgresql.psycopg, "connect", refuse)
        with pytest.raises(UpstreamQueryError):
            pg_repository.get_site(1)
