"""
FastAPI dependencies - wiring for the search pipeline (SOLID: Dependency Inversion).
Challenge: Production collaborators by default, fakes in tests via dependency_overrides.
"""

from typing import Annotated

from elasticsearch import AsyncElasticsearch
from fastapi import Depends

from app.cache.redis_client import SearchResponseCache
from app.config import get_settings
from app.db.repositories.term_repository import TermRepository
from app.db.session import DbSession
from app.search.elasticsearch_client import ElasticsearchSearchExecutor, get_elasticsearch
from app.services.pagination import PaginationLinkBuilder
from app.services.projection import ResultProjector
from app.services.query_arguments import ArgumentBuilder
from app.services.search_service import SearchExecutor, SearchService
from app.services.taxonomy import TaxonomyResolver


async def get_search_executor(
    client: Annotated[AsyncElasticsearch, Depends(get_elasticsearch)],
) -> SearchExecutor:
    return ElasticsearchSearchExecutor(client)


def get_search_cache() -> SearchResponseCache | None:
    """None when caching is disabled (SEARCH_CACHE_TTL=0)."""
    settings = get_settings()
    if settings.search_cache_ttl <= 0:
        return None
    return SearchResponseCache(settings.search_cache_ttl)


def get_search_service(
    session: DbSession,
    executor: Annotated[SearchExecutor, Depends(get_search_executor)],
    cache: Annotated[SearchResponseCache | None, Depends(get_search_cache)],
) -> SearchService:
    """One service per request; the taxonomy resolver's memo lives as long as the request."""
    settings = get_settings()
    resolver = TaxonomyResolver(TermRepository(session), settings.object_taxonomies)
    return SearchService(
        argument_builder=ArgumentBuilder(settings.default_posts_per_page),
        executor=executor,
        projector=ResultProjector(resolver),
        link_builder=PaginationLinkBuilder(settings.search_base_url),
        cache=cache,
    )


SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
