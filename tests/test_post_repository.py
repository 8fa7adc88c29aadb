"""
Post repository tests - paged walk over the content store used by reindexing.
"""

import pytest

from app.db.models import Post
from app.db.repositories.post_repository import PostRepository


@pytest.mark.asyncio
async def test_iter_all_walks_every_page(session, content):
    session.add(Post(id=3, title="Draft", slug="draft", content="wip", status="draft"))
    await session.flush()

    posts = [post async for post in PostRepository(session).iter_all(batch_size=2)]

    assert [post.id for post in posts] == [1, 2, 3]


@pytest.mark.asyncio
async def test_unpublished_posts_are_flagged(session, content):
    session.add(Post(id=3, title="Draft", slug="draft", content="wip", status="draft"))
    await session.flush()

    published = {post.id: post.is_published async for post in PostRepository(session).iter_all()}

    assert published == {1: True, 2: True, 3: False}
