"""
Pytest fixtures - content store, fake search backend, client.
Challenge: Isolated tests; no Elasticsearch, Redis or PostgreSQL needed.
"""

from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_search_cache, get_search_executor
from app.db.base import Base
from app.db.models import Post, Term
from app.db.session import get_db
from app.main import app
from app.schemas.search import MatchRecord, QueryArguments, SearchResult
from app.search.elasticsearch_client import get_elasticsearch, page_count

# One shared in-memory SQLite connection per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

POST_DATE = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
POST_MODIFIED = datetime(2024, 3, 2, 17, 0, tzinfo=timezone.utc)


class FakeSearchExecutor:
    """Serves pre-set matches; pages are derived from total and the requested page size."""

    def __init__(self):
        self.matches: list[MatchRecord] = []
        self.total: int | None = None
        self.calls: list[QueryArguments] = []

    async def execute(self, arguments: QueryArguments) -> SearchResult:
        self.calls.append(arguments)
        total = len(self.matches) if self.total is None else self.total
        return SearchResult(self.matches, total, page_count(total, arguments.posts_per_page))


class FakeElasticsearch:
    def __init__(self, reachable: bool = True):
        self.reachable = reachable

    async def ping(self) -> bool:
        return self.reachable


@pytest.fixture
def make_record():
    def _make(id: int = 1, **overrides) -> MatchRecord:
        data = {
            "id": id,
            "title": f"Post {id}",
            "slug": f"post-{id}",
            "content": f"Full content of post {id}",
            "excerpt": f"Excerpt {id}",
            "date": POST_DATE,
            "modified": POST_MODIFIED,
            "post_type": "post",
            "relevance_score": 4.2,
        }
        data.update(overrides)
        return MatchRecord(**data)

    return _make


@pytest.fixture
def executor() -> FakeSearchExecutor:
    return FakeSearchExecutor()


@pytest.fixture
def elasticsearch() -> FakeElasticsearch:
    return FakeElasticsearch()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def content(session: AsyncSession) -> dict[str, Term]:
    """
    Categories: technology > python > asyncio, news. Tag: howto.
    Post 1 (post) is filed under asyncio, news and howto; post 2 is a page.
    """
    technology = Term(id=10, name="Technology", slug="technology", taxonomy="category", parent=0)
    python = Term(id=11, name="Python", slug="python", taxonomy="category", parent=10)
    asyncio_term = Term(id=12, name="Asyncio", slug="asyncio", taxonomy="category", parent=11)
    news = Term(id=13, name="News", slug="news", taxonomy="category", parent=0)
    howto = Term(id=20, name="Howto", slug="howto", taxonomy="post_tag", parent=0)
    session.add_all([technology, python, asyncio_term, news, howto])
    await session.flush()

    session.add_all(
        [
            Post(
                id=1, title="Post 1", slug="post-1", content="Full content of post 1",
                excerpt="Excerpt 1", post_type="post", date=POST_DATE, modified=POST_MODIFIED,
                terms=[asyncio_term, news, howto],
            ),
            Post(
                id=2, title="About", slug="about", content="About page", excerpt="",
                post_type="page", date=POST_DATE, modified=POST_MODIFIED,
            ),
        ]
    )
    await session.flush()
    return {t.slug: t for t in (technology, python, asyncio_term, news, howto)}


@pytest_asyncio.fixture
async def client(session: AsyncSession, content, executor: FakeSearchExecutor, elasticsearch: FakeElasticsearch):
    async def override_get_db():
        yield session

    async def override_get_elasticsearch():
        return elasticsearch

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_search_executor] = lambda: executor
    app.dependency_overrides[get_search_cache] = lambda: None
    app.dependency_overrides[get_elasticsearch] = override_get_elasticsearch
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
