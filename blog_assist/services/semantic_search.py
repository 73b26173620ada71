"""Embedding-based similarity search over article tables."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import column, select, table, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import TableClause

from blog_assist.config import settings
from blog_assist.core.exceptions import SemanticSearchDisabledError, ValidationError
from blog_assist.integrations.embeddings import EmbeddingsClient
from blog_assist.schemas.search import ArticleDocument, SimilarityResult

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def normalize_collection_name(collection: str) -> str:
    """Map ``guardscan-article`` style identifiers to their table name."""
    name = str(collection or "").strip().lower()
    if name.endswith("-article"):
        name = f"{name[: -len('-article')]}_articles"
    return name.replace("-", "_")


class SemanticSearchService:
    """Rank articles by cosine similarity between pgvector embeddings."""

    def __init__(
        self,
        *,
        embeddings: EmbeddingsClient,
        session_factory: SessionFactory,
        enabled: bool | None = None,
        collections: list[str] | None = None,
        dimensions: int | None = None,
    ) -> None:
        self.embeddings = embeddings
        self.session_factory = session_factory
        self.enabled = settings.enable_semantic_search if enabled is None else enabled
        self.collections = frozenset(
            normalize_collection_name(name)
            for name in (collections if collections is not None else settings.semantic_search_collections)
        )
        self.dimensions = dimensions or settings.embedding_dimensions

    @property
    def is_enabled(self) -> bool:
        """Feature flag on and an embedding credential available."""
        return bool(self.enabled and self.embeddings.is_configured)

    def _article_table(self, collection: str) -> TableClause:
        name = normalize_collection_name(collection)
        if name not in self.collections:
            raise ValidationError(f"Unknown collection: {collection}")
        return table(
            name,
            column("id"),
            column("title"),
            column("slug"),
            column("excerpt"),
            column("content"),
            column("embedding", Vector(self.dimensions)),
        )

    async def search(
        self,
        query: str,
        collection: str | None = None,
        limit: int | None = None,
    ) -> list[SimilarityResult]:
        """Return the articles closest to ``query``, most similar first."""
        if not self.is_enabled:
            raise SemanticSearchDisabledError()
        if query is None or not str(query).strip():
            raise ValidationError("Query required")

        articles = self._article_table(collection or settings.semantic_search_default_collection)
        limit = limit or settings.semantic_search_default_limit
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        query_embedding = await self.embeddings.embed(query)
        distance = articles.c.embedding.cosine_distance(query_embedding)
        statement = (
            select(
                articles.c.id,
                articles.c.title,
                articles.c.slug,
                articles.c.excerpt,
                (1 - distance).label("similarity"),
            )
            .where(articles.c.embedding.is_not(None))
            .order_by(distance)
            .limit(limit)
        )

        async with self.session_factory() as session:
            result = await session.execute(statement)
            rows = result.mappings().all()

        logger.info(
            "Semantic search completed",
            extra={"collection": articles.name, "limit": limit, "result_count": len(rows)},
        )
        return [SimilarityResult.model_validate(dict(row)) for row in rows]

    async def index_article(self, article: ArticleDocument, collection: str) -> bool:
        """Embed an article and store the vector on its row.

        Returns False without calling the provider when search is disabled.
        """
        if not self.is_enabled:
            logger.warning(
                "Skipping embedding, semantic search not enabled",
                extra={"article_id": article.id, "collection": collection},
            )
            return False

        articles = self._article_table(collection)
        text_to_embed = f"{article.title} {article.excerpt or ''} {article.content or ''}"
        embedding = await self.embeddings.embed(text_to_embed)

        async with self.session_factory() as session:
            await session.execute(
                update(articles)
                .where(articles.c.id == article.id)
                .values(embedding=embedding)
            )

        logger.info("Article indexed", extra={"article_id": article.id, "collection": articles.name})
        return True

    async def list_unindexed_articles(
        self,
        collection: str,
        limit: int = 100,
    ) -> list[ArticleDocument]:
        """Articles whose embedding column is still empty."""
        articles = self._article_table(collection)
        statement = (
            select(articles.c.id, articles.c.title, articles.c.excerpt, articles.c.content)
            .where(articles.c.embedding.is_(None))
            .order_by(articles.c.id)
            .limit(limit)
        )
        async with self.session_factory() as session:
            result = await session.execute(statement)
            rows: list[Any] = list(result.mappings().all())

        return [
            ArticleDocument.model_validate({**dict(row), "title": row["title"] or ""})
            for row in rows
        ]
