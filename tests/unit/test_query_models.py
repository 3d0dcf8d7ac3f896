"""
Term and entry filter model tests: parsing raw filter dicts.
"""

import pytest

from core.models import EntryQuery, MetaClause, TaxConstraint, TermQuery
from exceptions import UpstreamQueryError


class TestTermQuery:

    def test_defaults(self):
        query = TermQuery.from_args(None, taxonomy="cats")
        assert query.taxonomy == "cats"
        assert query.hide_empty is False
        assert query.orderby == "name"
        assert query.order == "ASC"
        assert query.number == 0
        assert query.meta_query == []

    def test_normalizes_lists_and_case(self):
        query = TermQuery.from_args({"slug": "a, b", "orderby": "COUNT", "order": "desc"})
        assert query.slug == ["a", "b"]
        assert query.orderby == "count"
        assert query.order == "DESC"

    def test_geo_key_adds_exists_clause(self):
        query = TermQuery.from_args({}, geo_key="geo")
        assert len(query.meta_query) == 1
        assert query.meta_query[0].key == "geo"
        assert query.meta_query[0].compare == "EXISTS"

    def test_meta_query_dict_and_relation_marker(self):
        query = TermQuery.from_args({"meta_query": [{"relation": "OR"}, {"key": "color", "value": "red"}]})
        assert len(query.meta_query) == 1
        assert query.meta_query[0].compare == "="

    def test_explicit_filter_taxonomy_wins(self):
        query = TermQuery.from_args({"taxonomy": "other"}, taxonomy="cats")
        assert query.taxonomy == "other"

    @pytest.mark.parametrize("args", [
        {"number": "abc"},
        {"orderby": "random"},
        {"meta_query": "geo"},
        ["slug"],
    ])
    def test_malformed_filters_raise_upstream_error(self, args):
        with pytest.raises(UpstreamQueryError):
            TermQuery.from_args(args)

    def test_entry_orderby_ignored(self):
        assert TermQuery.from_args({"orderby": "title"}).orderby == "name"
        assert TermQuery.from_args({"orderby": "Date"}).orderby == "name"

    def test_empty_number_means_unlimited(self):
        assert TermQuery.from_args({"number": ""}).number == 0


class TestMetaClause:

    def test_explicit_compare_kept(self):
        clause = MetaClause(key="geo", value="x", compare="like")
        assert clause.compare == "LIKE"


class TestEntryQuery:

    def test_defaults(self):
        query = EntryQuery.from_args({})
        assert query.numberposts == -1
        assert query.post_status == ["publish"]
        assert query.tax_relation == "AND"
        assert query.required == []

    def test_relation_item_sets_relation(self):
        query = EntryQuery.from_args({"tax_query": [
            {"relation": "or"},
            {"field": "slug", "terms": ["a"]},
            {"field": "id", "terms": [3]},
        ]}, taxonomy="cats")
        assert query.tax_relation == "OR"
        assert [c.field for c in query.tax_query] == ["slug", "term_id"]
        assert all(c.taxonomy == "cats" for c in query.tax_query)

    def test_non_list_tax_query_raises(self):
        with pytest.raises(UpstreamQueryError):
            EntryQuery.from_args({"tax_query": {"field": "slug"}})

    def test_blog_id_meta_key(self):
        query = EntryQuery.from_args({"meta_key": "blog_id", "meta_value": "7"})
        assert query.blog_id == 7

    def test_unsupported_meta_key_raises(self):
        with pytest.raises(UpstreamQueryError):
            EntryQuery.from_args({"meta_key": "color", "meta_value": "red"})

    def test_extra_constraints_are_required(self):
        query = EntryQuery.from_args(
            {"tax_query": [{"relation": "OR"}, {"terms": [1]}, {"terms": [2]}]},
            taxonomy="cats",
            extra_constraints=[{"field": "term_id", "terms": [9]}],
        )
        assert len(query.required) == 1
        assert query.required[0].terms == [9]
        assert query.required[0].taxonomy == "cats"
        assert query.tax_relation == "OR"

    def test_term_orderby_ignored(self):
        assert EntryQuery.from_args({"orderby": "count"}).orderby == "date"
        assert EntryQuery.from_args({"orderby": "slug", "order": "ASC"}).order == "ASC"

    def test_unknown_orderby_raises(self):
        with pytest.raises(UpstreamQueryError):
            EntryQuery.from_args({"orderby": "random"})

    def test_any_status(self):
        assert EntryQuery.from_args({"post_status": "any"}).any_status is True

    def test_null_numberposts_uses_default(self):
        assert EntryQuery.from_args({"numberposts": None}).numberposts == -1

    def test_caller_cannot_inject_required(self):
        query = EntryQuery.from_args({"required": [{"terms": [1]}]})
        assert query.required == []


class TestTaxConstraint:

    def test_operator_normalized(self):
        assert TaxConstraint(terms="a,b", operator="not in").operator == "NOT IN"

    def test_unknown_operator_rejected(self):
        with pytest.raises(ValueError):
            TaxConstraint(operator="BETWEEN")
