"""AI authoring API endpoints."""

import logging

from fastapi import APIRouter

from blog_assist.api.v1.ai.constants import (
    GENERATE_BLOG_DRAFT_PATH,
    GENERATE_EXCERPT_PATH,
    GENERATE_IMAGE_PATH,
    GENERATE_SEO_PATH,
    STATUS_PATH,
)
from blog_assist.api.v1.errors import to_http_exception
from blog_assist.core.exceptions import BlogAssistError
from blog_assist.dependencies import ImageGeneration, Services, TextGeneration
from blog_assist.schemas.ai import (
    AIStatusResponse,
    GenerateBlogDraftRequest,
    GenerateBlogDraftResponse,
    GenerateExcerptRequest,
    GenerateExcerptResponse,
    GenerateImageRequest,
    GenerateImageResponse,
    GenerateSEORequest,
    SEOMetadata,
)
from blog_assist.services.featured_image_generation import ImageGenerationRequest
from blog_assist.services.image_prompt_builder import BrandOverrides

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    GENERATE_SEO_PATH,
    response_model=SEOMetadata,
    summary="Generate SEO metadata",
)
async def generate_seo(
    payload: GenerateSEORequest,
    text_generation: TextGeneration,
) -> SEOMetadata:
    """Return a meta title and description for an article."""
    try:
        return await text_generation.generate_seo(payload.title, payload.content)
    except BlogAssistError as exc:
        raise to_http_exception(exc) from exc


@router.post(
    GENERATE_EXCERPT_PATH,
    response_model=GenerateExcerptResponse,
    summary="Generate an article excerpt",
)
async def generate_excerpt(
    payload: GenerateExcerptRequest,
    text_generation: TextGeneration,
) -> GenerateExcerptResponse:
    """Summarize article content within ``maxLength`` characters."""
    try:
        excerpt = await text_generation.generate_excerpt(payload.content, payload.max_length)
    except BlogAssistError as exc:
        raise to_http_exception(exc) from exc
    return GenerateExcerptResponse(excerpt=excerpt)


@router.post(
    GENERATE_IMAGE_PATH,
    response_model=GenerateImageResponse,
    response_model_exclude_none=True,
    summary="Generate a header image",
)
async def generate_image(
    payload: GenerateImageRequest,
    image_generation: ImageGeneration,
) -> GenerateImageResponse:
    """Render a brand-consistent header image.

    Gemini returns inline base64 data; DALL-E 3 returns a temporary URL.
    Without an explicit ``method`` a recoverable Gemini failure falls back
    to DALL-E 3.
    """
    overrides = None
    if payload.brand is not None:
        overrides = BrandOverrides(**payload.brand.model_dump())

    request = ImageGenerationRequest(
        title=payload.title or "",
        content=payload.content or "",
        overrides=overrides,
        category=payload.category,
        collection_type=payload.collection_type,
        method=payload.method,
    )
    try:
        result = await image_generation.generate(request)
    except BlogAssistError as exc:
        raise to_http_exception(exc) from exc

    return GenerateImageResponse(
        method=result.method,
        prompt=result.prompt,
        image_url=result.image_url,
        image_base64=result.image_base64,
        mime_type=result.mime_type,
        fallback=result.fallback,
        fallback_reason=result.fallback_reason,
        prompt_fallback=result.prompt_fallback,
        message=result.message,
    )


@router.post(
    GENERATE_BLOG_DRAFT_PATH,
    response_model=GenerateBlogDraftResponse,
    summary="Generate a blog article draft",
)
async def generate_blog_draft(
    payload: GenerateBlogDraftRequest,
    text_generation: TextGeneration,
) -> GenerateBlogDraftResponse:
    """Write an HTML article body for a topic."""
    try:
        content = await text_generation.generate_blog_draft(
            payload.topic,
            keywords=payload.keywords,
            outline=payload.outline,
        )
    except BlogAssistError as exc:
        raise to_http_exception(exc) from exc
    return GenerateBlogDraftResponse(content=content)


@router.get(STATUS_PATH, response_model=AIStatusResponse, summary="AI provider status")
async def ai_status(services: Services) -> AIStatusResponse:
    return AIStatusResponse(
        gemini=services.gemini.is_configured,
        openai=services.openai_images.is_configured,
        semantic_search=services.semantic_search.is_enabled,
    )
