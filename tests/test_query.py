from urllib.parse import parse_qsl

import pytest

from strapi_client.api.query import (
    Pagination,
    QueryParams,
    build_query_string,
    flatten_params,
    with_query,
)


@pytest.mark.parametrize("params", [None, {}, QueryParams()])
def test_empty_params_give_empty_string(params):
    assert build_query_string(params) == ""
    assert with_query("articles", params) == "articles"


def test_lists_use_array_indices():
    assert flatten_params({"populate": ["author", "cover"]}) == [
        ("populate[0]", "author"),
        ("populate[1]", "cover"),
    ]


def test_nested_filters_and_logical_combinators():
    filters = {
        "$or": [
            {"title": {"$containsi": "news"}},
            {"views": {"$gt": 10}},
        ],
        "author": {"name": {"$null": False}},
    }

    assert flatten_params({"filters": filters}) == [
        ("filters[$or][0][title][$containsi]", "news"),
        ("filters[$or][1][views][$gt]", "10"),
        ("filters[author][name][$null]", "false"),
    ]


def test_none_values_are_skipped():
    assert flatten_params({"locale": None, "sort": ["title:asc"]}) == [("sort[0]", "title:asc")]


def test_query_string_is_percent_encoded_and_decodes_back():
    query = build_query_string({"filters": {"title": {"$eq": "a b&c"}}})

    assert "[" not in query and "$" not in query and "&c" not in query
    assert parse_qsl(query) == [("filters[title][$eq]", "a b&c")]


def test_query_params_use_wire_names():
    params = QueryParams(
        populate="*",
        fields=["title"],
        sort=["publishedAt:desc"],
        pagination=Pagination(page=2, page_size=25, with_count=True),
        locale="fr",
        publication_state="preview",
    )

    assert dict(flatten_params(params)) == {
        "populate": "*",
        "fields[0]": "title",
        "sort[0]": "publishedAt:desc",
        "pagination[page]": "2",
        "pagination[pageSize]": "25",
        "pagination[withCount]": "true",
        "locale": "fr",
        "publicationState": "preview",
    }


def test_with_query_prefixes_question_mark():
    assert with_query("articles/1", {"locale": "fr"}) == "articles/1?locale=fr"
