"""Semantic search API endpoints."""

from fastapi import APIRouter

from blog_assist.api.v1.errors import to_http_exception
from blog_assist.api.v1.search.constants import SEMANTIC_SEARCH_PATH, STATUS_PATH
from blog_assist.core.exceptions import BlogAssistError
from blog_assist.dependencies import SemanticSearch
from blog_assist.schemas.search import (
    SearchStatusResponse,
    SemanticSearchRequest,
    SemanticSearchResponse,
)

router = APIRouter()


@router.post(
    SEMANTIC_SEARCH_PATH,
    response_model=SemanticSearchResponse,
    summary="Find similar articles",
)
async def semantic_search(
    payload: SemanticSearchRequest,
    search: SemanticSearch,
) -> SemanticSearchResponse:
    """Rank articles in a collection by embedding similarity to the query."""
    try:
        results = await search.search(payload.query, payload.collection, payload.limit)
    except BlogAssistError as exc:
        raise to_http_exception(exc) from exc
    return SemanticSearchResponse(results=results)


@router.get(STATUS_PATH, response_model=SearchStatusResponse, summary="Semantic search status")
async def search_status(search: SemanticSearch) -> SearchStatusResponse:
    return SearchStatusResponse(enabled=search.is_enabled)
