"""
Search service - turns request parameters into the search response envelope.
Challenge: Orchestrate argument building, backend call, projection, paging links, cache.
Design: All collaborators injected at construction; easy to test with fakes.
"""

import logging
from typing import Any, Protocol

from fastapi import status
from fastapi.encoders import jsonable_encoder
from prometheus_client import Counter

from app.cache.redis_client import SearchResponseCache
from app.core.errors import EMPTY_QUERY_MESSAGE, NOTHING_FOUND_MESSAGE, error_body
from app.schemas.search import QueryArguments, QueryParameters, SearchOutcome, SearchResult
from app.services.pagination import PaginationLinkBuilder
from app.services.projection import ResultProjector
from app.services.query_arguments import ArgumentBuilder

logger = logging.getLogger(__name__)

SEARCH_REQUESTS = Counter(
    "search_requests_total",
    "Search requests by outcome",
    ["outcome"],
)


class SearchExecutor(Protocol):
    async def execute(self, arguments: QueryArguments) -> SearchResult: ...


def _filters_meta(arguments: QueryArguments) -> dict[str, Any]:
    tax_filter = arguments.taxonomy_filter
    if tax_filter is None:
        return {}
    return {"category": tax_filter.terms, "taxonomy": tax_filter.taxonomy}


class SearchService:
    """Empty query -> 400, no matches -> 404, otherwise 200 with results and meta."""

    def __init__(
        self,
        argument_builder: ArgumentBuilder,
        executor: SearchExecutor,
        projector: ResultProjector,
        link_builder: PaginationLinkBuilder,
        cache: SearchResponseCache | None = None,
    ):
        self.argument_builder = argument_builder
        self.executor = executor
        self.projector = projector
        self.link_builder = link_builder
        self.cache = cache

    async def search(self, parameters: QueryParameters) -> SearchOutcome:
        arguments = self.argument_builder.build(parameters)

        if not arguments.s:
            SEARCH_REQUESTS.labels(outcome="empty_query").inc()
            return SearchOutcome(error_body(EMPTY_QUERY_MESSAGE), status.HTTP_400_BAD_REQUEST)

        if self.cache is not None:
            cached = await self.cache.get(parameters)
            if cached is not None:
                SEARCH_REQUESTS.labels(outcome="cache_hit").inc()
                return SearchOutcome(cached, status.HTTP_200_OK)

        result = await self.executor.execute(arguments)
        if not result.matches:
            SEARCH_REQUESTS.labels(outcome="not_found").inc()
            return SearchOutcome(error_body(NOTHING_FOUND_MESSAGE), status.HTTP_404_NOT_FOUND)

        results = [await self.projector.project(match, parameters) for match in result.matches]
        meta: dict[str, Any] = {
            "filters": _filters_meta(arguments),
            "total": result.total,
            "pages": result.pages,
            "current_page": arguments.paged,
            "per_page": arguments.posts_per_page,
            "s": arguments.s,
        }
        if arguments.paged < result.pages:
            meta["next"] = self.link_builder.build_link(arguments, parameters, "next")
        if arguments.paged > 1:
            meta["previous"] = self.link_builder.build_link(arguments, parameters, "previous")

        body = jsonable_encoder({"success": True, "results": results, "meta": meta})
        if self.cache is not None:
            await self.cache.set(parameters, body)
        SEARCH_REQUESTS.labels(outcome="success").inc()
        logger.debug("search s=%r page=%s/%s total=%s", arguments.s, arguments.paged, result.pages, result.total)
        return SearchOutcome(body, status.HTTP_200_OK)
