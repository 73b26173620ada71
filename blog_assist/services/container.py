"""Process-wide provider clients and the services built on them."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blog_assist.agents.text_completion import TextCompletionAgent
from blog_assist.core.database import get_session_context
from blog_assist.integrations.embeddings import EmbeddingsClient
from blog_assist.integrations.gemini import GeminiClient
from blog_assist.integrations.openai_images import OpenAIImageClient
from blog_assist.services.featured_image_generation import FeaturedImageGenerationService
from blog_assist.services.image_prompt_builder import ImagePromptComposer
from blog_assist.services.semantic_search import SemanticSearchService, SessionFactory
from blog_assist.services.text_generation import TextGenerationService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    """Clients are created once at start-up and reused for every request."""

    gemini: GeminiClient
    openai_images: OpenAIImageClient
    embeddings: EmbeddingsClient
    text_generation: TextGenerationService
    image_generation: FeaturedImageGenerationService
    semantic_search: SemanticSearchService

    async def aclose(self) -> None:
        for client in (self.gemini, self.openai_images, self.embeddings):
            await client.aclose()
        logger.info("Provider clients closed")


def build_service_container(session_factory: SessionFactory | None = None) -> ServiceContainer:
    """Wire provider clients into services using application settings."""
    session_factory = session_factory or get_session_context
    gemini = GeminiClient()
    openai_images = OpenAIImageClient()
    embeddings = EmbeddingsClient()
    text_generation = TextGenerationService(TextCompletionAgent())

    return ServiceContainer(
        gemini=gemini,
        openai_images=openai_images,
        embeddings=embeddings,
        text_generation=text_generation,
        image_generation=FeaturedImageGenerationService(
            prompt_composer=ImagePromptComposer(text_generation),
            gemini=gemini,
            openai_images=openai_images,
        ),
        semantic_search=SemanticSearchService(
            embeddings=embeddings,
            session_factory=session_factory,
        ),
    )
