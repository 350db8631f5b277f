"""Test fixtures for API and database tests."""

import os
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator, Iterator, List, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    for path in (root / "src", root):
        if str(path) not in sys.path:
            sys.path.append(str(path))


ensure_src_on_path()

os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("RUN_TASKS_INLINE", "true")
os.environ.setdefault("ENABLE_LLM_FALLBACK", "false")

from api.routers import pipeline, shoes
from models import Base, get_db
from services.shoe_extraction.models import Article

GHOST_CONTENT = (
    "Brooks Ghost 17 weighs 283 grams... 32mm heel height with 20mm forefoot height... "
    "12mm drop and costs $140"
)


def make_article(
    article_id=1,
    record_id="rec001",
    title="Brooks Ghost 17 Review",
    content=GHOST_CONTENT,
    position="2024-05-01T10:00:00Z",
    **kwargs,
) -> Article:
    return Article(
        article_id=article_id,
        record_id=record_id,
        title=title,
        content=content,
        source_position=position,
        **kwargs,
    )


def _parse(position: str) -> datetime:
    return datetime.fromisoformat(position.replace("Z", "+00:00"))


class FakeSource:
    """In-memory article source that honours ``since`` and ``limit``."""

    def __init__(self, articles: List[Article]):
        self.articles = articles
        self.calls = []
        self.closed = False

    def fetch_articles(self, since: Optional[str] = None, limit: Optional[int] = None) -> Iterator[Article]:
        self.calls.append({"since": since, "limit": limit})
        yielded = 0
        for article in self.articles:
            if since and _parse(article.source_position) <= _parse(since):
                continue
            if limit is not None and yielded >= limit:
                return
            yielded += 1
            yield article

    def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    connection = db_engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def test_app():
    @asynccontextmanager
    async def test_lifespan(app: FastAPI) -> AsyncGenerator:
        yield

    app = FastAPI(
        title="ShoeLens Test",
        description="Running-shoe specs extracted from review articles",
        version="0.1.0",
        lifespan=test_lifespan,
    )

    app.include_router(shoes.router, prefix="/api/v1/shoes", tags=["shoes"])
    app.include_router(pipeline.router, prefix="/api/v1/pipeline", tags=["pipeline"])

    @app.get("/")
    async def root():
        return {
            "name": "ShoeLens",
            "version": "0.1.0",
            "status": "running",
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture(scope="function")
def client(db_session: Session, test_app: FastAPI):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    test_app.dependency_overrides[get_db] = override_get_db
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
