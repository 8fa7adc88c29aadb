"""
Pagination link tests - next/previous URLs.
"""

from urllib.parse import parse_qs, parse_qsl, urlsplit

from app.services.pagination import PaginationLinkBuilder
from app.services.query_arguments import ArgumentBuilder, query_parameters_from

BASE_URL = "https://example.com/wp-json/relevanssi/v1/search"


def _link(parameters, direction):
    arguments = ArgumentBuilder().build(parameters)
    return PaginationLinkBuilder(BASE_URL).build_link(arguments, parameters, direction)


def test_next_link_increments_page():
    link = _link({"s": "test", "paged": "2"}, "next")
    parts = urlsplit(link)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == BASE_URL
    assert parse_qs(parts.query) == {"posts_per_page": ["10"], "s": ["test"], "paged": ["3"]}


def test_previous_link_decrements_page():
    query = parse_qs(urlsplit(_link({"s": "test", "paged": "2"}, "previous")).query)
    assert query["paged"] == ["1"]


def test_no_clamping_below_first_page():
    query = parse_qs(urlsplit(_link({"s": "test"}, "previous")).query)
    assert query["paged"] == ["0"]


def test_carries_original_filter_parameters():
    parameters = {
        "s": "test",
        "posts_per_page": "5",
        "post_type": "post,page",
        "category": "news",
        "taxonomy": "category",
        "fields": "id,title",
    }
    query = parse_qs(urlsplit(_link(parameters, "next")).query)
    assert query["posts_per_page"] == ["5"]
    # copied as sent, not as coerced
    assert query["post_type"] == ["post,page"]
    assert query["category"] == ["news"]
    assert query["taxonomy"] == ["category"]
    assert query["fields"] == ["id,title"]


def test_empty_optional_parameters_are_omitted():
    query = parse_qs(urlsplit(_link({"s": "test", "category": "", "fields": ""}, "next")).query)
    assert "category" not in query
    assert "fields" not in query
    assert "post_type" not in query


def test_array_parameters_keep_array_marker():
    link = _link({"s": "test", "post_type": ["post", "page"]}, "next")
    assert "post_type[]=post&post_type[]=page" in link


def test_one_element_array_survives_next_page():
    parameters = {"s": "x", "post_type": ["post,page"], "fields": ["id"]}
    link = _link(parameters, "next")

    decoded = query_parameters_from(parse_qsl(urlsplit(link).query))
    assert decoded["post_type"] == ["post,page"]
    assert decoded["fields"] == ["id"]
    # the next page searches the same types as this one
    assert ArgumentBuilder().build(decoded).post_type == ArgumentBuilder().build(parameters).post_type == ["post,page"]


def test_search_term_is_url_encoded():
    link = _link({"s": "hello world&more"}, "next")
    assert "s=hello+world%26more" in link
