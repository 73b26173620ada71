"""Semantic search schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from blog_assist.config import settings
from blog_assist.schemas.ai import CamelModel


class SimilarityResult(CamelModel):
    """One article ranked by embedding similarity to the query."""

    id: int | str
    title: str | None = None
    slug: str | None = None
    excerpt: str | None = None
    similarity: float


class SemanticSearchRequest(CamelModel):
    """Body of POST /search/semantic."""

    query: str | None = None
    collection: str = Field(default_factory=lambda: settings.semantic_search_default_collection)
    limit: int = Field(default_factory=lambda: settings.semantic_search_default_limit, ge=1, le=50)


class SemanticSearchResponse(CamelModel):
    results: list[SimilarityResult]


class SearchStatusResponse(BaseModel):
    enabled: bool


class ArticleDocument(CamelModel):
    """Article fields used to build its embedding."""

    id: int | str
    title: str
    excerpt: str | None = None
    content: str | None = None
