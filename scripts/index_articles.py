"""Backfill embeddings for articles whose embedding column is still NULL.

Usage:
  ENABLE_SEMANTIC_SEARCH=true python scripts/index_articles.py --collection guardscan_articles
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from blog_assist.config import settings
from blog_assist.core.database import close_db, get_session_context
from blog_assist.core.exceptions import BlogAssistError
from blog_assist.core.logging import setup_logging
from blog_assist.integrations.embeddings import EmbeddingsClient
from blog_assist.services.semantic_search import SemanticSearchService

logger = logging.getLogger("blog_assist.scripts.index_articles")


def parse_args() -> argparse.Namespace:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--collection",
        default=settings.semantic_search_default_collection,
        help="Article table or collection type to backfill",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=100,
        help="Maximum number of articles to embed in this run",
    )
    return parser.parse_args()


async def _backfill(args: argparse.Namespace) -> int:
    if args.limit < 1:
        print("--limit must be at least 1", file=sys.stderr)
        return 1

    async with EmbeddingsClient() as embeddings:
        search = SemanticSearchService(embeddings=embeddings, session_factory=get_session_context)
        if not search.is_enabled:
            print(
                "Semantic search not enabled; set ENABLE_SEMANTIC_SEARCH and OPENAI_API_KEY",
                file=sys.stderr,
            )
            return 1

        try:
            articles = await search.list_unindexed_articles(args.collection, limit=args.limit)
        except BlogAssistError as exc:
            print(f"Failed to list articles: {exc.message}", file=sys.stderr)
            return 1

        indexed = 0
        failed = 0
        for article in articles:
            try:
                if await search.index_article(article, args.collection):
                    indexed += 1
            except BlogAssistError as exc:
                failed += 1
                logger.warning(
                    "Failed to index article",
                    extra={"article_id": article.id, "error": exc.message},
                )

    print(f"Indexed {indexed} of {len(articles)} articles in {args.collection} ({failed} failed)")
    return 1 if failed else 0


async def async_main(args: argparse.Namespace) -> int:
    try:
        return await _backfill(args)
    finally:
        await close_db()


def main() -> int:
    setup_logging()
    return asyncio.run(async_main(parse_args()))


if __name__ == "__main__":
    raise SystemExit(main())
