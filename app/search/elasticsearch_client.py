"""
Elasticsearch client - the search backend behind the search endpoint.
Challenge: Index management, async query execution, clear failure when ES is down.
Sync helpers used by Celery workers (no event loop in fork).
"""

import logging
import math
from typing import Any
from urllib.parse import urlparse

from elasticsearch import ApiError, AsyncElasticsearch, Elasticsearch, TransportError

from app.config import get_settings
from app.core.errors import SearchBackendError
from app.schemas.search import MatchRecord, QueryArguments, SearchResult
from app.services.query_arguments import parse_list

logger = logging.getLogger(__name__)

settings = get_settings()

# Fields searched by multi_match; title weighs most
SEARCH_FIELDS = ["title^5", "excerpt^2", "content", "slug"]

_es_client: AsyncElasticsearch | None = None


def _es_client_options() -> dict:
    """Build Elasticsearch client options from settings (supports HTTPS + basic auth in URL)."""
    url = settings.elasticsearch_url
    basic_auth = None
    if "@" in url and "://" in url:
        parsed = urlparse(url)
        if parsed.username and parsed.password:
            basic_auth = (parsed.username, parsed.password)
        # Remove auth from URL for the client (it uses basic_auth separately)
        netloc = parsed.hostname or ""
        if parsed.port:
            netloc += f":{parsed.port}"
        url = f"{parsed.scheme}://{netloc}"
    opts = {
        "hosts": [url],
        "verify_certs": settings.elasticsearch_verify_certs,
        "request_timeout": 30,
    }
    if basic_auth:
        opts["basic_auth"] = basic_auth
    return opts


async def get_elasticsearch() -> AsyncElasticsearch:
    """Get Elasticsearch client. Dependency injection for tests."""
    global _es_client
    if _es_client is None:
        _es_client = AsyncElasticsearch(**_es_client_options())
    return _es_client


async def close_elasticsearch() -> None:
    global _es_client
    if _es_client is not None:
        await _es_client.close()
        _es_client = None


def _posts_index_mappings() -> dict:
    """Mapping for posts index (shared by async and sync create)."""
    return {
        "properties": {
            "id": {"type": "integer"},
            "title": {"type": "text", "analyzer": "standard"},
            "slug": {"type": "text", "analyzer": "simple"},
            "content": {"type": "text", "analyzer": "standard"},
            "excerpt": {"type": "text", "analyzer": "standard"},
            "post_type": {"type": "keyword"},
            "date": {"type": "date"},
            "modified": {"type": "date"},
            # taxonomy name -> term slugs, e.g. {"category": ["news"]}
            "taxonomies": {"type": "flattened"},
        }
    }


def post_to_doc(post) -> dict[str, Any]:
    """Convert a Post row to the document stored in the index."""
    taxonomies: dict[str, list[str]] = {}
    for term in post.terms:
        taxonomies.setdefault(term.taxonomy, []).append(term.slug)
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "content": post.content or "",
        "excerpt": post.excerpt or "",
        "post_type": post.post_type,
        "date": post.date.isoformat() if post.date else None,
        "modified": post.modified.isoformat() if post.modified else None,
        "taxonomies": taxonomies,
    }


def _clean_doc(doc: dict[str, Any]) -> dict[str, Any]:
    """Avoid sending null dates (ES can reject)."""
    return {k: v for k, v in doc.items() if v is not None}


def build_search_query(arguments: QueryArguments) -> dict[str, Any]:
    """bool query: full-text must clause, post type and taxonomy filters."""
    filters: list[dict[str, Any]] = []
    if "any" not in arguments.post_type:
        filters.append({"terms": {"post_type": arguments.post_type}})
    for tax_filter in arguments.tax_query:
        filters.append({"terms": {f"taxonomies.{tax_filter.taxonomy}": parse_list(tax_filter.terms)}})
    return {
        "bool": {
            "must": [
                {
                    "multi_match": {
                        "query": arguments.s,
                        "fields": SEARCH_FIELDS,
                        "fuzziness": "AUTO",
                    }
                }
            ],
            "filter": filters,
        }
    }


def hit_to_record(hit: dict[str, Any]) -> MatchRecord:
    return MatchRecord(**hit["_source"], relevance_score=hit.get("_score") or 0.0)


def page_count(total: int, posts_per_page: int) -> int:
    if posts_per_page <= 0:
        return 0
    return math.ceil(total / posts_per_page)


class ElasticsearchSearchExecutor:
    """Runs QueryArguments against the posts index. Paging values pass through as given."""

    def __init__(self, client: AsyncElasticsearch, index: str | None = None):
        self.client = client
        self.index = index or settings.posts_index

    async def execute(self, arguments: QueryArguments) -> SearchResult:
        try:
            response = await self.client.search(
                index=self.index,
                query=build_search_query(arguments),
                from_=(arguments.paged - 1) * arguments.posts_per_page,
                size=arguments.posts_per_page,
                track_total_hits=True,
            )
        except (ApiError, TransportError) as e:
            logger.warning("search failed: s=%r error=%s", arguments.s, e)
            raise SearchBackendError(str(e)) from e

        # Response may be ObjectApiResponse; support both .body and dict access
        body = getattr(response, "body", response)
        hits = body["hits"]["hits"]
        total = body["hits"].get("total")
        total_val = total.get("value", len(hits)) if isinstance(total, dict) else len(hits)
        if total_val == 0:
            logger.info("search: s=%r returned 0 hits", arguments.s)
        return SearchResult(
            matches=[hit_to_record(hit) for hit in hits],
            total=total_val,
            pages=page_count(total_val, arguments.posts_per_page),
        )


async def ensure_posts_index() -> None:
    """Create posts index with mapping if not exists. Single-node: 0 replicas to avoid unassigned shards."""
    es = await get_elasticsearch()
    if not await es.indices.exists(index=settings.posts_index):
        await es.indices.create(
            index=settings.posts_index,
            settings={"index": {"number_of_replicas": 0}},
            mappings=_posts_index_mappings(),
        )
        logger.info("Created index %r", settings.posts_index)


async def index_post(doc: dict[str, Any]) -> None:
    """Index a single post. ES 8 expects id as str."""
    es = await get_elasticsearch()
    await es.index(index=settings.posts_index, id=str(doc["id"]), document=_clean_doc(doc))


async def remove_post(post_id: int) -> None:
    """Remove a single post. Missing documents are fine."""
    es = await get_elasticsearch()
    await es.options(ignore_status=404).delete(index=settings.posts_index, id=str(post_id))


# --- Sync API for Celery (workers run in sync context; async + new_event_loop fails after fork) ---

def sync_es_client() -> Elasticsearch:
    """New sync client (safe in forked Celery worker). The caller closes it."""
    return Elasticsearch(**_es_client_options())


def ensure_posts_index_sync(es: Elasticsearch) -> None:
    """Create posts index if not exists. Call from Celery task."""
    if not es.indices.exists(index=settings.posts_index):
        es.indices.create(
            index=settings.posts_index,
            settings={"index": {"number_of_replicas": 0}},
            mappings=_posts_index_mappings(),
        )


def index_post_sync(doc: dict[str, Any], es: Elasticsearch) -> None:
    """Index a single post. Call from Celery task. Errors propagate so the task can retry."""
    es.index(index=settings.posts_index, id=str(doc["id"]), document=_clean_doc(doc))


def remove_post_sync(post_id: int, es: Elasticsearch) -> None:
    """Remove a post from the index (unpublished or deleted). Missing documents are fine."""
    es.options(ignore_status=404).delete(index=settings.posts_index, id=str(post_id))
