"""
Taxonomy resolver - terms of a match grouped by taxonomy.
Challenge: Parent terms are resolved exactly one level deep; the resolved
parent keeps its own parent as an id.
"""

import logging

from app.db.models.term import Term
from app.db.repositories.term_repository import TermRepository
from app.schemas.search import NO_PARENT, MatchRecord, TaxonomyTerm

logger = logging.getLogger(__name__)


class TaxonomyResolver:
    """Request-scoped: memoizes parent lookups for the lifetime of one search."""

    def __init__(self, term_repo: TermRepository, object_taxonomies: dict[str, list[str]]):
        self.term_repo = term_repo
        self.object_taxonomies = object_taxonomies
        self._parents: dict[int, TaxonomyTerm | None] = {}

    def taxonomies_for(self, post_type: str) -> list[str]:
        return list(self.object_taxonomies.get(post_type, []))

    async def _parent(self, parent_id: int) -> TaxonomyTerm | None:
        if parent_id not in self._parents:
            parent = await self.term_repo.get_by_id(parent_id)
            if parent is None:
                logger.debug("Parent term %s not found; keeping id", parent_id)
            self._parents[parent_id] = TaxonomyTerm.model_validate(parent) if parent else None
        return self._parents[parent_id]

    async def _resolve_term(self, term: Term) -> TaxonomyTerm:
        resolved = TaxonomyTerm.model_validate(term)
        if term.parent != NO_PARENT:
            parent = await self._parent(term.parent)
            if parent is not None:
                resolved.parent = parent
        return resolved

    async def resolve(self, record: MatchRecord) -> dict[str, list[TaxonomyTerm]]:
        """Every taxonomy registered for the record's type is a key, empty or not."""
        grouped: dict[str, list[TaxonomyTerm]] = {}
        for taxonomy in self.taxonomies_for(record.post_type):
            terms = await self.term_repo.get_for_post(record.id, taxonomy)
            grouped[taxonomy] = [await self._resolve_term(term) for term in terms]
        return grouped
