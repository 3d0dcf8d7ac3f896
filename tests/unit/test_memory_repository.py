"""
In-memory repository tests: term and entry filtering over fixture records.
"""

import json

import pytest

from core.models import EntryQuery, TermQuery
from exceptions import ConfigurationError, UpstreamQueryError
from infrastructure.memory_repository import InMemoryDirectoryRepository
from tests.factories.directory_factories import ALPHA, BETA, DELTA, GAMMA


def _ids(items):
    return sorted(getattr(i, "term_id", None) or i.ID for i in items)


class TestTerms:

    def test_all_terms_sorted_by_name(self, repository):
        terms = repository.get_terms(1, TermQuery())
        assert [t.name for t in terms] == ["Alpha", "Beta", "Delta", "Gamma"]

    def test_counts_only_published_entries(self, repository):
        counts = {t.term_id: t.count for t in repository.get_terms(1, TermQuery())}
        assert counts == {ALPHA: 2, BETA: 1, GAMMA: 1, DELTA: 0}

    def test_hide_empty(self, repository):
        terms = repository.get_terms(1, TermQuery(hide_empty=True))
        assert DELTA not in _ids(terms)

    def test_geo_filter(self, repository):
        terms = repository.get_terms(1, TermQuery.from_args({}, geo_key="geo"))
        assert _ids(terms) == [ALPHA, BETA, DELTA]

    def test_slug_include_exclude(self, repository):
        assert _ids(repository.get_terms(1, TermQuery(slug=["beta", "gamma"]))) == [BETA, GAMMA]
        assert _ids(repository.get_terms(1, TermQuery(include=[ALPHA]))) == [ALPHA]
        assert ALPHA not in _ids(repository.get_terms(1, TermQuery(exclude=[ALPHA])))

    def test_order_by_count_desc_with_limit(self, repository):
        terms = repository.get_terms(1, TermQuery(orderby="count", order="DESC", number=1))
        assert [t.term_id for t in terms] == [ALPHA]

    def test_meta_value_compare(self, repository):
        query = TermQuery.from_args({"meta_query": [{"key": "geo", "value": "10.5,20.25"}]})
        assert _ids(repository.get_terms(1, query)) == [ALPHA]

    def test_other_taxonomy_excluded(self, repository):
        assert repository.get_terms(1, TermQuery(taxonomy="post_tag")) == []

    def test_unknown_tenant_raises(self, repository):
        with pytest.raises(UpstreamQueryError):
            repository.get_terms(99, TermQuery())


class TestEntries:

    def test_default_query_returns_published(self, repository):
        assert _ids(repository.get_entries(1, EntryQuery())) == [100, 101, 102]

    def test_any_status_includes_drafts(self, repository):
        assert 103 in _ids(repository.get_entries(1, EntryQuery(post_status=["any"])))

    def test_in_by_slug(self, repository):
        query = EntryQuery.from_args({"tax_query": [{"field": "slug", "terms": ["beta"]}]})
        assert _ids(repository.get_entries(1, query)) == [101]

    def test_not_in(self, repository):
        query = EntryQuery.from_args({"tax_query": [{"terms": [ALPHA], "operator": "NOT IN"}]})
        assert _ids(repository.get_entries(1, query)) == [102]

    def test_and_requires_every_term(self, repository):
        query = EntryQuery.from_args({"tax_query": [{"terms": [ALPHA, BETA], "operator": "AND"}]})
        assert _ids(repository.get_entries(1, query)) == [101]

    def test_and_with_unknown_term_matches_nothing(self, repository):
        query = EntryQuery.from_args({"tax_query": [{"terms": [ALPHA, 999], "operator": "AND"}]})
        assert repository.get_entries(1, query) == []

    def test_or_relation(self, repository):
        query = EntryQuery.from_args({"tax_query": [
            {"relation": "OR"},
            {"terms": [BETA]},
            {"terms": [GAMMA]},
        ]})
        assert _ids(repository.get_entries(1, query)) == [101, 102]

    def test_required_constraint_and_or_group(self, repository):
        query = EntryQuery.from_args(
            {"tax_query": [{"relation": "OR"}, {"terms": [BETA]}, {"terms": [GAMMA]}]},
            extra_constraints=[{"terms": [ALPHA]}],
        )
        assert _ids(repository.get_entries(1, query)) == [101]

    def test_blog_id_and_limit(self, repository):
        query = EntryQuery(blog_id=2, post_status=["any"], numberposts=1, orderby="date", order="DESC")
        entries = repository.get_entries(1, query)
        assert [e.ID for e in entries] == [100]

    def test_offset(self, repository):
        entries = repository.get_entries(1, EntryQuery(orderby="id", order="ASC", offset=1))
        assert [e.ID for e in entries] == [101, 102]

    def test_entry_terms(self, repository):
        assert _ids(repository.get_entry_terms(1, 101, "site_directory_category")) == [ALPHA, BETA]
        assert repository.get_entry_terms(1, 555, "site_directory_category") == []


class TestSites:

    def test_get_site(self, repository):
        assert repository.get_site(3).blog_id == 3
        assert repository.get_site(42) is None

    def test_main_site_from_network_map(self, repository):
        assert repository.get_main_site_id(1) == 1

    def test_main_site_from_site_flags(self, directory_records):
        repo = InMemoryDirectoryRepository.from_dict({
            "sites": [dict(s, network_id=2, is_main_site=(s["blog_id"] == 3)) for s in directory_records["sites"]],
        })
        assert repo.get_main_site_id(2) == 3
        assert repo.get_main_site_id(1) is None


class TestLoading:

    def test_sample_data_file_loads(self, sample_data_path):
        repo = InMemoryDirectoryRepository.from_file(sample_data_path)
        assert repo.get_main_site_id(1) == 1
        assert repo.get_site(2).blogname == "Boston Tenants Union"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            InMemoryDirectoryRepository.from_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            InMemoryDirectoryRepository.from_file(path)

    def test_invalid_records(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"sites": [{"blog_id": "x"}]}), encoding="utf-8")
        with pytest.raises(ConfigurationError):
            InMemoryDirectoryRepository.from_file(path)
