"""
Post repository - content reads for indexing (SOLID: Single Responsibility).
Challenge: Walk the whole table in pages without loading it at once.
"""

from collections.abc import AsyncIterator

from sqlalchemy import select

from app.db.models.post import Post
from app.db.repositories.base_repository import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Post-specific queries. Terms are eager-loaded by the relationship (selectin)."""

    def __init__(self, session):
        super().__init__(session, Post)

    async def get_many(self, skip: int = 0, limit: int = 100) -> list[Post]:
        """Page of posts in id order, any status."""
        result = await self.session.execute(
            select(Post).offset(skip).limit(limit).order_by(Post.id)
        )
        return list(result.scalars().all())

    async def iter_all(self, batch_size: int = 100) -> AsyncIterator[Post]:
        """Yield every post, one page of rows at a time. Callers branch on is_published."""
        skip = 0
        while True:
            batch = await self.get_many(skip=skip, limit=batch_size)
            for post in batch:
                yield post
            if len(batch) < batch_size:
                break
            skip += batch_size
