#!/usr/bin/env python3
"""
Sync the posts index with the content store: published posts are indexed,
every other post (draft, private, trashed) is removed from the index.
By default each post is enqueued for the Celery worker; --direct writes to
Elasticsearch from this process instead (no worker needed).

If you get 503 / no_shard_available from Elasticsearch, drop the index first:
  python scripts/reindex_posts.py --reset-index --direct

  python scripts/reindex_posts.py
  python scripts/reindex_posts.py --direct --batch-size 500
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import get_settings
from app.db.repositories.post_repository import PostRepository
from app.db.session import async_session_maker
from app.queue.tasks import index_post_task, remove_post_task
from app.search.elasticsearch_client import (
    close_elasticsearch,
    ensure_posts_index,
    get_elasticsearch,
    index_post,
    post_to_doc,
    remove_post,
)


async def reset_index() -> None:
    """Delete the posts index; it is recreated with number_of_replicas=0 before indexing."""
    index = get_settings().posts_index
    es = await get_elasticsearch()
    if await es.indices.exists(index=index):
        await es.indices.delete(index=index)
        print(f"Deleted index '{index}'.")
    else:
        print(f"Index '{index}' does not exist (already deleted or never created).")


async def reindex(direct: bool, batch_size: int) -> tuple[int, int]:
    """Returns (indexed, removed) counts."""
    if direct:
        await ensure_posts_index()
    indexed = removed = 0
    async with async_session_maker() as session:
        repo = PostRepository(session)
        async for post in repo.iter_all(batch_size=batch_size):
            if post.is_published:
                doc = post_to_doc(post)
                if direct:
                    await index_post(doc)
                else:
                    index_post_task.delay(doc)
                indexed += 1
            else:
                if direct:
                    await remove_post(post.id)
                else:
                    remove_post_task.delay(post.id)
                removed += 1
            if (indexed + removed) % 100 == 0:
                print(f"  ... {indexed + removed} posts")
    return indexed, removed


async def main_async(args: argparse.Namespace) -> None:
    try:
        if args.reset_index:
            await reset_index()
        indexed, removed = await reindex(direct=args.direct, batch_size=args.batch_size)
    finally:
        await close_elasticsearch()

    if not indexed and not removed:
        print("No posts in the content store. Run scripts/seed_data.py first.")
        return
    if args.direct:
        print(f"Indexed {indexed} posts, removed {removed}.")
    else:
        print(f"Enqueued {indexed} posts for indexing and {removed} for removal. Ensure the Celery worker is running.")


def main():
    ap = argparse.ArgumentParser(description="Sync the posts index with the content store")
    ap.add_argument("--direct", action="store_true", help="Index from this process instead of via Celery")
    ap.add_argument("--reset-index", action="store_true", help="Delete the posts index first")
    ap.add_argument("--batch-size", type=int, default=100, help="Rows fetched per query")
    asyncio.run(main_async(ap.parse_args()))


if __name__ == "__main__":
    main()
