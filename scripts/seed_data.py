#!/usr/bin/env python3
"""
Seed script: creates categories, tags and posts directly in the content store.
Tables must exist (alembic upgrade head). Run reindex_posts.py afterwards so
the posts become searchable.
  python scripts/seed_data.py
  python scripts/seed_data.py --posts 500
"""

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.db.models import Post, Term
from app.db.repositories.base_repository import BaseRepository
from app.db.session import async_session_maker

# (name, slug, parent slug)
CATEGORIES = [
    ("News", "news", None),
    ("World", "world", "news"),
    ("Local", "local", "news"),
    ("Technology", "technology", None),
    ("Python", "python", "technology"),
    ("Search", "search", "technology"),
    ("Culture", "culture", None),
]

TAGS = ["elasticsearch", "fastapi", "release", "tutorial", "opinion", "interview", "howto"]

TITLES = [
    "Getting started with full-text search",
    "Why relevance ranking matters",
    "Release notes for the spring update",
    "Interview with the search team",
    "How to tune fuzzy matching",
    "Local elections: what changed",
    "A short history of taxonomies",
    "Pagination done right",
    "Field selection in JSON APIs",
    "Async Python in production",
]

PARAGRAPHS = [
    "Search quality depends on how documents are analyzed before they are indexed.",
    "Categories and tags help readers find related articles across the archive.",
    "This release improves the speed of queries on large collections.",
    "We spoke with the people who maintain the site about their workflow.",
    "Fuzzy matching tolerates typos at the cost of a few extra candidates.",
    "Every result page links to its neighbours so clients can walk the results.",
]


def slugify(text: str) -> str:
    return "-".join("".join(c for c in word if c.isalnum()) for word in text.lower().split())


async def seed(post_count: int) -> None:
    async with async_session_maker() as session:
        repo = BaseRepository(session, Term)
        categories: dict[str, Term] = {}
        for name, slug, parent_slug in CATEGORIES:
            parent = categories[parent_slug].id if parent_slug else 0
            categories[slug] = await repo.add(Term(name=name, slug=slug, taxonomy="category", parent=parent))
        tags = [await repo.add(Term(name=tag, slug=tag, taxonomy="post_tag")) for tag in TAGS]

        posts = BaseRepository(session, Post)
        for i in range(post_count):
            title = random.choice(TITLES)
            post_type = "page" if random.random() < 0.1 else "post"
            post = Post(
                title=f"{title} #{i + 1}",
                slug=f"{slugify(title)}-{i + 1}",
                content="\n\n".join(random.sample(PARAGRAPHS, 3)),
                excerpt=random.choice(PARAGRAPHS),
                post_type=post_type,
                status="draft" if random.random() < 0.05 else "publish",
            )
            if post_type == "post":
                post.terms = [random.choice(list(categories.values()))] + random.sample(tags, 2)
            await posts.add(post)
        await session.commit()

    print(f"Done. Categories: {len(categories)}, tags: {len(tags)}, posts: {post_count}")
    print("Tip: run scripts/reindex_posts.py --direct to make them searchable.")


def main():
    ap = argparse.ArgumentParser(description="Seed posts and terms into the content store")
    ap.add_argument("--posts", type=int, default=200, help="Number of posts to create")
    args = ap.parse_args()
    asyncio.run(seed(args.posts))


if __name__ == "__main__":
    main()
