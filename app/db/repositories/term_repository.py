"""
Term repository - taxonomy lookups by post and by id.
Challenge: One query per (post, taxonomy); parent lookups by primary key.
"""

from sqlalchemy import select

from app.db.models.post import post_terms
from app.db.models.term import Term
from app.db.repositories.base_repository import BaseRepository


class TermRepository(BaseRepository[Term]):
    """Term-specific queries for the taxonomy resolver."""

    def __init__(self, session):
        super().__init__(session, Term)

    async def get_for_post(self, post_id: int, taxonomy: str) -> list[Term]:
        """Terms of one taxonomy attached to a post, ordered by name."""
        result = await self.session.execute(
            select(Term)
            .join(post_terms, post_terms.c.term_id == Term.id)
            .where(post_terms.c.post_id == post_id, Term.taxonomy == taxonomy)
            .order_by(Term.name)
        )
        return list(result.scalars().all())
