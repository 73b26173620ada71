"""Unit tests for pgvector-backed semantic search."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import pytest
from sqlalchemy.dialects import postgresql

from blog_assist.core.exceptions import SemanticSearchDisabledError, ValidationError
from blog_assist.schemas.search import ArticleDocument
from blog_assist.services.semantic_search import SemanticSearchService, normalize_collection_name


class _FakeEmbeddings:
    def __init__(self, *, configured: bool = True) -> None:
        self.is_configured = configured
        self.texts: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.texts.append(text)
        return [0.1, 0.2, 0.3]


class _FakeResult:
    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows

    def mappings(self) -> _FakeResult:
        return self

    def all(self) -> list[dict[str, Any]]:
        return self._rows


class _FakeSession:
    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows = rows or []
        self.statements: list[Any] = []

    async def execute(self, statement: Any) -> _FakeResult:
        self.statements.append(statement)
        return _FakeResult(self.rows)


def _session_factory(session: _FakeSession):  # type: ignore[no-untyped-def]
    @asynccontextmanager
    async def factory() -> AsyncIterator[_FakeSession]:
        yield session

    return factory


def _service(
    session: _FakeSession,
    embeddings: _FakeEmbeddings | None = None,
    *,
    enabled: bool = True,
) -> SemanticSearchService:
    return SemanticSearchService(
        embeddings=embeddings or _FakeEmbeddings(),  # type: ignore[arg-type]
        session_factory=_session_factory(session),
        enabled=enabled,
        collections=["guardscan_articles", "amabex_articles"],
        dimensions=3,
    )


def _compiled_sql(statement: Any) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


def test_normalize_collection_name_accepts_collection_types() -> None:
    assert normalize_collection_name("guardscan-article") == "guardscan_articles"
    assert normalize_collection_name(" Amabex_Articles ") == "amabex_articles"


@pytest.mark.asyncio
async def test_disabled_search_fails_before_embedding() -> None:
    embeddings = _FakeEmbeddings()
    session = _FakeSession()

    with pytest.raises(SemanticSearchDisabledError, match="Semantic search not enabled"):
        await _service(session, embeddings, enabled=False).search("zero trust")

    assert embeddings.texts == []
    assert session.statements == []


@pytest.mark.asyncio
async def test_search_without_embedding_key_counts_as_disabled() -> None:
    embeddings = _FakeEmbeddings(configured=False)
    service = _service(_FakeSession(), embeddings)

    assert service.is_enabled is False
    with pytest.raises(SemanticSearchDisabledError):
        await service.search("zero trust")


@pytest.mark.asyncio
async def test_search_orders_by_cosine_distance_and_maps_rows() -> None:
    rows = [
        {"id": 7, "title": "Zero trust", "slug": "zero-trust", "excerpt": "Intro", "similarity": 0.92},
        {"id": 3, "title": "MFA", "slug": "mfa", "excerpt": None, "similarity": 0.81},
    ]
    session = _FakeSession(rows)
    embeddings = _FakeEmbeddings()

    results = await _service(session, embeddings).search("zero trust", "guardscan-article", 5)

    assert [result.id for result in results] == [7, 3]
    assert results[0].similarity == pytest.approx(0.92)
    assert embeddings.texts == ["zero trust"]

    sql = _compiled_sql(session.statements[0])
    assert "FROM guardscan_articles" in sql
    assert "<=>" in sql
    assert "embedding IS NOT NULL" in sql
    assert "ORDER BY" in sql
    assert "LIMIT" in sql


@pytest.mark.asyncio
async def test_search_rejects_unknown_collection() -> None:
    with pytest.raises(ValidationError, match="Unknown collection"):
        await _service(_FakeSession()).search("query", "users")


@pytest.mark.asyncio
async def test_search_requires_query() -> None:
    embeddings = _FakeEmbeddings()

    with pytest.raises(ValidationError, match="Query required"):
        await _service(_FakeSession(), embeddings).search("  ")

    assert embeddings.texts == []


@pytest.mark.asyncio
async def test_index_article_updates_embedding_column() -> None:
    session = _FakeSession()
    embeddings = _FakeEmbeddings()
    article = ArticleDocument(id=12, title="Supplier risk", excerpt="Short", content="Body")

    indexed = await _service(session, embeddings).index_article(article, "amabex_articles")

    assert indexed is True
    assert embeddings.texts == ["Supplier risk Short Body"]
    sql = _compiled_sql(session.statements[0])
    assert sql.startswith("UPDATE amabex_articles SET embedding=")
    assert "WHERE amabex_articles.id =" in sql


@pytest.mark.asyncio
async def test_index_article_is_skipped_when_disabled() -> None:
    session = _FakeSession()
    embeddings = _FakeEmbeddings()
    article = ArticleDocument(id=12, title="Supplier risk")

    indexed = await _service(session, embeddings, enabled=False).index_article(article, "amabex_articles")

    assert indexed is False
    assert embeddings.texts == []
    assert session.statements == []


@pytest.mark.asyncio
async def test_list_unindexed_articles_selects_null_embeddings() -> None:
    session = _FakeSession([{"id": 1, "title": None, "excerpt": None, "content": "Body"}])

    articles = await _service(session).list_unindexed_articles("guardscan_articles", limit=20)

    assert articles[0].id == 1
    assert articles[0].title == ""
    assert "embedding IS NULL" in _compiled_sql(session.statements[0])
