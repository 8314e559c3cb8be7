"""Unit tests for the Elasticsearch query, filter and sort builders."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from admin_search.adapters.elasticsearch import FilterBuilder, QueryBuilder, SortBuilder
from admin_search.application.search import index_registry


# ---------------------------------------------------------------------------
# QueryBuilder
# ---------------------------------------------------------------------------


class TestQueryBuilder:
    @pytest.mark.parametrize("query", [None, "", "   ", "*", " * "])
    def test_match_everything(self, query: str | None) -> None:
        assert QueryBuilder(("name",)).build(query) is None

    def test_multi_match(self) -> None:
        assert QueryBuilder(("name", "description")).build(" jakarta ") == {
            "multi_match": {
                "query": "jakarta",
                "fields": ["name", "description"],
                "type": "best_fields",
                "fuzziness": "AUTO",
                "minimum_should_match": "75%",
            }
        }

    def test_no_searchable_fields_matches_everything(self) -> None:
        assert QueryBuilder(()).build("jakarta") is None


# ---------------------------------------------------------------------------
# FilterBuilder
# ---------------------------------------------------------------------------


class TestFilterBuilder:
    def test_empty(self) -> None:
        assert FilterBuilder().build({}) is None
        assert FilterBuilder().build(None) is None

    def test_exact_is_lowercased_term(self) -> None:
        assert FilterBuilder().build({"status": "Published"}) == {"term": {"status": "published"}}

    def test_membership_is_terms(self) -> None:
        assert FilterBuilder().build({"status": ["Draft", "Published"]}) == {
            "terms": {"status": ["draft", "published"]}
        }

    def test_range(self) -> None:
        assert FilterBuilder().build({"price": {"gte": 10, "lte": 50}}) == {
            "range": {"price": {"gte": 10, "lte": 50}}
        }

    def test_boolean_string_becomes_bool(self) -> None:
        assert FilterBuilder(("is_paid",)).build({"is_paid": "true"}) == {"term": {"is_paid": True}}

    def test_exists(self) -> None:
        assert FilterBuilder().build({"cover_image": "exists"}) == {"exists": {"field": "cover_image"}}

    def test_several_clauses_wrapped_in_bool_filter(self) -> None:
        assert FilterBuilder(("is_paid",)).build({"status": "draft", "is_paid": "0"}) == {
            "bool": {"filter": [{"term": {"status": "draft"}}, {"term": {"is_paid": False}}]}
        }

    def test_no_whitelist_on_index(self) -> None:
        assert FilterBuilder().build({"anything": "x"}) == {"term": {"anything": "x"}}

    def test_malformed_values_dropped(self) -> None:
        assert FilterBuilder(("is_paid",)).build({"is_paid": "maybe", "price": {"between": 1}}) is None


# ---------------------------------------------------------------------------
# SortBuilder
# ---------------------------------------------------------------------------


class TestSortBuilder:
    @pytest.fixture()
    def roles(self) -> SortBuilder:
        return SortBuilder(index_registry().resolve("roles"))

    def test_keyword_field_sorts_on_sibling(self, roles: SortBuilder) -> None:
        assert roles.build("name:desc") == [
            {"name.keyword": {"order": "desc", "missing": "_last", "unmapped_type": "keyword"}}
        ]

    def test_plain_field(self, roles: SortBuilder) -> None:
        assert roles.build("created_at") == [{"created_at": {"order": "asc", "missing": "_last"}}]

    def test_pseudo_fields(self, roles: SortBuilder) -> None:
        assert roles.build("_score:desc") == [{"_score": {"order": "desc"}}]

    def test_id_sorts_on_keyword_copy(self, roles: SortBuilder) -> None:
        assert roles.build("_id:desc") == [
            {"id": {"order": "desc", "missing": "_last", "unmapped_type": "keyword"}}
        ]

    def test_invalid_falls_back_to_default(self, roles: SortBuilder) -> None:
        assert roles.build("password:asc") == [{"created_at": {"order": "desc", "missing": "_last"}}]

    def test_list_spec(self, roles: SortBuilder) -> None:
        ordering = roles.build(["description:asc", "updated_at:desc"])
        assert list(ordering[0]) == ["description.keyword"]
        assert ordering[1] == {"updated_at": {"order": "desc", "missing": "_last"}}

    @given(st.one_of(st.none(), st.text(max_size=30), st.lists(st.text(max_size=10), max_size=4)))
    def test_never_empty(self, spec: object) -> None:
        assert SortBuilder(index_registry().resolve("events")).build(spec)
