"""Unit tests for StrapiQuery."""

from __future__ import annotations

from urllib.parse import parse_qsl

from strapi_client.query import SortDirection, StrapiFilter, StrapiQuery
from strapi_client.query.filters import And, Condition


class TestEmptyAndBasics:
    def test_empty_query_builds_nothing(self) -> None:
        assert StrapiQuery().build() == []
        assert StrapiQuery().to_query_string() == ""

    def test_flat_filter(self) -> None:
        query = StrapiQuery().filter(StrapiFilter.equals("title", "Hello"))
        assert query.build() == [("filters[title][$eq]", "Hello")]

    def test_sort_indices_follow_call_order(self) -> None:
        query = StrapiQuery().sort("title").sort("createdAt", SortDirection.desc)
        assert query.build() == [("sort[0]", "title:asc"), ("sort[1]", "createdAt:desc")]

    def test_pagination(self) -> None:
        assert StrapiQuery().page(2, 25).build() == [
            ("pagination[page]", "2"),
            ("pagination[pageSize]", "25"),
        ]

    def test_pagination_is_not_range_checked(self) -> None:
        assert StrapiQuery().page(0, -5).build() == [
            ("pagination[page]", "0"),
            ("pagination[pageSize]", "-5"),
        ]

    def test_last_page_call_wins(self) -> None:
        assert StrapiQuery().page(1, 10).page(3, 50).build() == [
            ("pagination[page]", "3"),
            ("pagination[pageSize]", "50"),
        ]

    def test_fields(self) -> None:
        query = StrapiQuery().fields("title", "slug").fields("publishedAt")
        assert query.build() == [
            ("fields[0]", "title"),
            ("fields[1]", "slug"),
            ("fields[2]", "publishedAt"),
        ]


class TestImmutability:
    def test_methods_return_new_queries(self) -> None:
        base = StrapiQuery().filter(StrapiFilter.equals("status", "published"))
        drafts = base.sort("title")
        paged = base.page(1, 10)

        assert base.build() == [("filters[status][$eq]", "published")]
        assert drafts.build() == [("filters[status][$eq]", "published"), ("sort[0]", "title:asc")]
        assert ("sort[0]", "title:asc") not in paged.build()

    def test_equal_queries_compare_equal(self) -> None:
        a = StrapiQuery().sort("title").page(1, 10)
        b = StrapiQuery().sort("title").page(1, 10)
        assert a == b


class TestFilterBlocks:
    def test_single_condition_block_is_unwrapped(self) -> None:
        query = StrapiQuery().filters(lambda f: f.equals("title", "Hello"))
        assert query.build() == [("filters[title][$eq]", "Hello")]

    def test_multi_condition_block_is_and_wrapped(self) -> None:
        query = StrapiQuery().filters(lambda f: f.equals("a", "1").equals("b", "2"))
        assert query.build() == [
            ("filters[$and][0][a][$eq]", "1"),
            ("filters[$and][1][b][$eq]", "2"),
        ]

    def test_each_block_contributes_one_node(self) -> None:
        query = (
            StrapiQuery()
            .filters(lambda f: f.equals("a", "1").equals("b", "2"))
            .filters(lambda f: f.equals("c", "3"))
        )
        assert query.filter_tree == (
            And(
                (
                    Condition(StrapiFilter.equals("a", "1")),
                    Condition(StrapiFilter.equals("b", "2")),
                )
            ),
            Condition(StrapiFilter.equals("c", "3")),
        )
        assert query.build() == [
            ("filters[$and][0][$and][0][a][$eq]", "1"),
            ("filters[$and][0][$and][1][b][$eq]", "2"),
            ("filters[$and][1][c][$eq]", "3"),
        ]

    def test_empty_block_emits_nothing(self) -> None:
        assert StrapiQuery().filters(lambda f: None).build() == []

    def test_deep_or_with_list_values(self) -> None:
        query = StrapiQuery().filters(
            lambda f: f.or_(
                lambda g: g.equals("author.name", "Alice").in_("tags", ["swift", "ios"])
            )
        )
        assert query.build() == [
            ("filters[$or][0][author][name][$eq]", "Alice"),
            ("filters[$or][1][tags][$in][0]", "swift"),
            ("filters[$or][1][tags][$in][1]", "ios"),
        ]

    def test_flat_filters_come_before_tree(self) -> None:
        query = (
            StrapiQuery()
            .filters(lambda f: f.equals("b", "2"))
            .filter(StrapiFilter.in_("a", ["x", "y"]))
        )
        assert query.build() == [
            ("filters[a][$in]", "x"),
            ("filters[a][$in]", "y"),
            ("filters[b][$eq]", "2"),
        ]


class TestPopulate:
    def test_flat_populate_names(self) -> None:
        query = StrapiQuery().populate("author").populate("tags")
        assert query.build() == [("populate[0]", "author"), ("populate[1]", "tags")]

    def test_empty_block_populates_relation(self) -> None:
        query = StrapiQuery().populate("author", lambda p: None)
        assert query.build() == [("populate[author]", "*")]

    def test_populate_all_wins(self) -> None:
        query = StrapiQuery().populate("author", lambda p: p.fields("name")).populate_all()
        assert query.build() == [("populate", "*")]


class TestParameterOrder:
    def test_full_query_order(self) -> None:
        query = (
            StrapiQuery()
            .fields("title")
            .populate("author", lambda p: p.fields("name"))
            .page(1, 10)
            .sort("createdAt", SortDirection.desc)
            .filters(lambda f: f.equals("status", "published"))
            .filter(StrapiFilter.contains("title", "swift"))
        )
        assert query.build() == [
            ("filters[title][$containsi]", "swift"),
            ("filters[status][$eq]", "published"),
            ("sort[0]", "createdAt:desc"),
            ("pagination[page]", "1"),
            ("pagination[pageSize]", "10"),
            ("populate[author][fields][0]", "name"),
            ("fields[0]", "title"),
        ]


class TestQueryString:
    def test_brackets_and_dollar_are_percent_encoded(self) -> None:
        query = StrapiQuery().filter(StrapiFilter.equals("title", "a b"))
        assert query.to_query_string() == "filters%5Btitle%5D%5B%24eq%5D=a+b"

    def test_round_trip_preserves_pairs_and_order(self) -> None:
        query = (
            StrapiQuery()
            .filters(lambda f: f.or_(lambda g: g.equals("a", "x&y").equals("b", "50%")))
            .sort("title")
            .page(1, 10)
        )
        assert parse_qsl(query.to_query_string()) == query.build()
