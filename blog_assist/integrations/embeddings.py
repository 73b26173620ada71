"""Embeddings integration for semantic article search.

Uses OpenAI's text-embedding-3-small model.
"""

import logging

from blog_assist.config import settings
from blog_assist.core.exceptions import ExternalAPIError
from blog_assist.integrations.base import ProviderHTTPClient

logger = logging.getLogger(__name__)


class EmbeddingsClient(ProviderHTTPClient):
    """Client for generating text embeddings."""

    API_NAME = "OpenAI Embeddings"
    MAX_BATCH_SIZE = 100

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(
            api_key=api_key or settings.openai_api_key,
            base_url=base_url or settings.openai_base_url,
            timeout=timeout,
        )
        self.model = model or settings.embeddings_model

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def embed(self, text: str) -> list[float]:
        """Embed a single text into a fixed-length vector."""
        vectors = await self.get_embeddings([text])
        if not vectors:
            raise ExternalAPIError(self.API_NAME, "Empty embedding response")
        return vectors[0]

    async def get_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors in input order
        """
        logger.info("Generating embeddings", extra={"text_count": len(texts), "model": self.model})
        if not texts:
            return []

        all_embeddings: list[list[float]] = []

        for i in range(0, len(texts), self.MAX_BATCH_SIZE):
            batch = texts[i:i + self.MAX_BATCH_SIZE]
            result = await self._post_json(
                "embeddings",
                {
                    "model": self.model,
                    "input": batch,
                    "encoding_format": "float",
                },
            )
            data = result.get("data", [])

            # Sort by index to maintain order
            sorted_data = sorted(data, key=lambda x: x.get("index", 0))
            all_embeddings.extend(item["embedding"] for item in sorted_data)

        return all_embeddings
