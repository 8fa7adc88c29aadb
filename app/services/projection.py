"""
Result projector - match records to client-facing objects with only the requested fields.
Design: Fixed accessor table keyed by output field name; no attribute reflection.
"""

from collections.abc import Callable
from typing import Any

from app.schemas.search import MatchRecord, QueryParameters
from app.services.query_arguments import is_provided, parse_list
from app.services.taxonomy import TaxonomyResolver

TAXONOMIES_FIELD = "taxonomies"

DEFAULT_FIELDS = ["id", "title", "slug", "excerpt", "date", "modified", TAXONOMIES_FIELD]

FIELD_ACCESSORS: dict[str, Callable[[MatchRecord], Any]] = {
    "id": lambda record: record.id,
    "title": lambda record: record.title,
    "slug": lambda record: record.slug,
    "content": lambda record: record.content,
    "excerpt": lambda record: record.excerpt,
    "date": lambda record: record.date,
    "modified": lambda record: record.modified,
    "type": lambda record: record.post_type,
    "relevance": lambda record: record.relevance_score,
}


def requested_fields(parameters: QueryParameters) -> list[str]:
    if is_provided(parameters, "fields"):
        return parse_list(parameters["fields"])
    return list(DEFAULT_FIELDS)


class ResultProjector:
    """Builds the per-result dict; key order follows the requested field order."""

    def __init__(self, taxonomy_resolver: TaxonomyResolver):
        self.taxonomy_resolver = taxonomy_resolver

    async def project(self, record: MatchRecord, parameters: QueryParameters) -> dict[str, Any]:
        projected: dict[str, Any] = {}
        for field in requested_fields(parameters):
            if field == TAXONOMIES_FIELD:
                taxonomies = await self.taxonomy_resolver.resolve(record)
                projected[field] = {
                    name: [term.model_dump() for term in terms] for name, terms in taxonomies.items()
                }
            elif field in FIELD_ACCESSORS:
                projected[field] = FIELD_ACCESSORS[field](record)
            # unknown field names are dropped
        return projected
