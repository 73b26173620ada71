"""AI generation request and response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ImageMethod = Literal["gemini", "dalle3"]


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SEOMetadata(CamelModel):
    """Search-engine metadata for one article."""

    meta_title: str
    meta_description: str


class GenerateSEORequest(CamelModel):
    """Body of POST /ai/generate-seo."""

    title: str | None = None
    content: str | None = None


class GenerateExcerptRequest(CamelModel):
    """Body of POST /ai/generate-excerpt."""

    content: str | None = None
    max_length: int = Field(default=300, ge=0)


class GenerateExcerptResponse(CamelModel):
    excerpt: str


class BrandOverridesPayload(CamelModel):
    """Optional visual overrides applied over the collection's brand profile."""

    style: str | None = None
    colors: str | None = None
    avoid: str | None = None
    composition: str | None = None


class GenerateImageRequest(CamelModel):
    """Body of POST /ai/generate-image."""

    title: str | None = None
    content: str | None = None
    brand: BrandOverridesPayload | None = None
    category: str | None = None
    collection_type: str | None = None
    method: ImageMethod | None = None


class GenerateImageResponse(CamelModel):
    """Generated header image plus fallback bookkeeping."""

    method: ImageMethod
    prompt: str
    image_url: str | None = None
    image_base64: str | None = None
    mime_type: str | None = None
    fallback: bool = False
    fallback_reason: str | None = None
    prompt_fallback: bool = False
    message: str


class GenerateBlogDraftRequest(CamelModel):
    """Body of POST /ai/generate-blog-draft."""

    topic: str | None = None
    keywords: list[str] = Field(default_factory=list)
    outline: str = ""


class GenerateBlogDraftResponse(CamelModel):
    content: str


class AIStatusResponse(CamelModel):
    """Which providers and features are configured."""

    gemini: bool
    openai: bool
    semantic_search: bool
