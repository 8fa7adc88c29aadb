"""
Search API tests - GET /relevanssi/v1/search end to end with a fake backend.
"""

import pytest
from httpx import AsyncClient

from app.core.errors import SearchBackendError

SEARCH_URL = "/relevanssi/v1/search"


@pytest.mark.asyncio
async def test_missing_search_term(client: AsyncClient, executor):
    response = await client.get(SEARCH_URL)
    assert response.status_code == 400
    assert response.json() == {"error": True, "message": "Empty search query"}
    assert executor.calls == []


@pytest.mark.asyncio
async def test_empty_search_term(client: AsyncClient, executor):
    response = await client.get(SEARCH_URL, params={"s": ""})
    assert response.status_code == 400
    assert executor.calls == []


@pytest.mark.asyncio
async def test_nothing_found(client: AsyncClient):
    response = await client.get(SEARCH_URL, params={"s": "test"})
    assert response.status_code == 404
    assert response.json() == {"error": True, "message": "Nothing found"}


@pytest.mark.asyncio
async def test_success_default_fields(client: AsyncClient, executor, make_record):
    executor.matches = [make_record(1)]
    response = await client.get(SEARCH_URL, params={"s": "test"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["meta"]["total"] == 1
    assert data["meta"]["pages"] == 1
    assert "next" not in data["meta"]
    assert "previous" not in data["meta"]

    result = data["results"][0]
    assert list(result) == ["id", "title", "slug", "excerpt", "date", "modified", "taxonomies"]
    assert result["slug"] == "post-1"
    categories = result["taxonomies"]["category"]
    assert [c["slug"] for c in categories] == ["asyncio", "news"]
    assert categories[0]["parent"]["slug"] == "python"


@pytest.mark.asyncio
async def test_field_selection(client: AsyncClient, executor, make_record):
    executor.matches = [make_record(1)]
    response = await client.get(SEARCH_URL, params={"s": "test", "fields": "bogus,id,relevance"})
    assert response.json()["results"] == [{"id": 1, "relevance": 4.2}]


@pytest.mark.asyncio
async def test_array_style_parameters(client: AsyncClient, executor, make_record):
    executor.matches = [make_record(1)]
    response = await client.get(
        f"{SEARCH_URL}?s=test&post_type[]=post&post_type[]=page&fields[]=id&fields[]=type"
    )
    assert response.status_code == 200
    assert executor.calls[0].post_type == ["post", "page"]
    assert response.json()["results"] == [{"id": 1, "type": "post"}]


@pytest.mark.asyncio
async def test_pagination_links(client: AsyncClient, executor, make_record):
    executor.matches = [make_record(i) for i in range(1, 6)]
    executor.total = 25
    response = await client.get(
        SEARCH_URL, params={"s": "test", "paged": "2", "posts_per_page": "5", "category": "news"}
    )
    meta = response.json()["meta"]
    assert meta["pages"] == 5
    assert meta["per_page"] == 5
    assert meta["filters"] == {"category": "news", "taxonomy": "category"}
    assert meta["next"].startswith("http://localhost:8000/relevanssi/v1/search?")
    assert "paged=3" in meta["next"]
    assert "category=news" in meta["next"]
    assert "paged=1" in meta["previous"]


@pytest.mark.asyncio
async def test_custom_taxonomy_filter(client: AsyncClient, executor, make_record):
    executor.matches = [make_record(1)]
    response = await client.get(SEARCH_URL, params={"s": "test", "category": "howto", "taxonomy": "post_tag"})
    assert response.json()["meta"]["filters"] == {"category": "howto", "taxonomy": "post_tag"}
    assert executor.calls[0].tax_query[0].taxonomy == "post_tag"


@pytest.mark.asyncio
async def test_backend_failure_is_502(client: AsyncClient, executor):
    async def failing_execute(arguments):
        raise SearchBackendError("connection refused")

    executor.execute = failing_execute
    response = await client.get(SEARCH_URL, params={"s": "test"})
    assert response.status_code == 502
    assert response.json() == {"error": True, "message": "Search backend error"}
