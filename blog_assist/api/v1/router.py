"""API v1 router aggregator."""

from fastapi import APIRouter

from blog_assist.api.v1.ai import routes as ai
from blog_assist.api.v1.search import routes as search

api_router = APIRouter()

api_router.include_router(ai.router, prefix="/ai", tags=["AI"])
api_router.include_router(search.router, prefix="/search", tags=["Search"])
