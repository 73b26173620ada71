"""Header image generation with prompt and provider fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blog_assist.core.exceptions import (
    AllProvidersUnavailableError,
    ExternalAPIError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    RateLimitExceededError,
    ValidationError,
)
from blog_assist.integrations.gemini import GeminiClient
from blog_assist.integrations.openai_images import OpenAIImageClient
from blog_assist.services.image_prompt_builder import (
    BrandOverrides,
    ImagePromptComposer,
    static_fallback_prompt,
)

logger = logging.getLogger(__name__)

METHOD_GEMINI = "gemini"
METHOD_DALLE3 = "dalle3"

PROVIDER_LABELS = {
    METHOD_GEMINI: "Gemini",
    METHOD_DALLE3: "DALL-E 3",
}

RECOVERABLE_STATUS_CODES = frozenset({408, 429, 503, 504})
RECOVERABLE_MARKERS = ("503", "overloaded", "429", "quota", "timeout")

GEMINI_READY_MESSAGE = "Base64 image ready - convert to blob and upload to Media Library"
DALLE_READY_MESSAGE = "Download and upload to Media Library"


@dataclass(slots=True)
class ImageGenerationRequest:
    """Input for one header image."""

    title: str
    content: str = ""
    overrides: BrandOverrides | None = None
    category: str | None = None
    collection_type: str | None = None
    method: str | None = None


@dataclass(slots=True)
class GeneratedImage:
    """Result payload from header image generation."""

    method: str
    prompt: str
    message: str
    image_url: str | None = None
    image_base64: str | None = None
    mime_type: str | None = None
    prompt_fallback: bool = False
    fallback: bool = False
    fallback_reason: str | None = None


def is_recoverable_provider_error(exc: Exception) -> bool:
    """Whether a primary-provider failure is transient enough to fall back."""
    if isinstance(exc, (RateLimitExceededError, ProviderTimeoutError)):
        return True
    if isinstance(exc, ExternalAPIError) and exc.status_code is not None:
        if exc.status_code in RECOVERABLE_STATUS_CODES:
            return True
    text = str(exc).lower()
    return any(marker in text for marker in RECOVERABLE_MARKERS)


class FeaturedImageGenerationService:
    """Compose a prompt and render it with Gemini, falling back to DALL-E 3.

    Prompt fallback and provider fallback are independent. An explicit
    ``method`` disables provider fallback but never prompt fallback.
    """

    def __init__(
        self,
        *,
        prompt_composer: ImagePromptComposer,
        gemini: GeminiClient,
        openai_images: OpenAIImageClient,
    ) -> None:
        self.prompt_composer = prompt_composer
        self.gemini = gemini
        self.openai_images = openai_images

    async def generate(self, request: ImageGenerationRequest) -> GeneratedImage:
        """Generate one header image."""
        title = " ".join(str(request.title or "").split())
        if not title:
            raise ValidationError("Title required")
        if request.method is not None and request.method not in PROVIDER_LABELS:
            raise ValidationError(f"Unknown image method: {request.method}")

        prompt, prompt_fallback = await self._build_prompt(request, title)

        if request.method is not None:
            result = await self._generate_with(request.method, prompt)
        else:
            result = await self._generate_with_fallback(prompt)

        result.prompt_fallback = prompt_fallback
        result.message = self._status_message(result)

        logger.info(
            "Header image generated",
            extra={
                "method": result.method,
                "requested_method": request.method,
                "collection_type": request.collection_type,
                "prompt_fallback": result.prompt_fallback,
                "fallback": result.fallback,
            },
        )
        return result

    async def _build_prompt(self, request: ImageGenerationRequest, title: str) -> tuple[str, bool]:
        try:
            prompt = await self.prompt_composer.compose(
                title=title,
                content=request.content or "",
                overrides=request.overrides,
                category=request.category,
                collection_type=request.collection_type,
            )
            return prompt, False
        except Exception as exc:
            logger.warning(
                "AI prompt generation failed, using static prompt",
                extra={"collection_type": request.collection_type, "error": str(exc)},
            )
            prompt = static_fallback_prompt(
                collection_type=request.collection_type,
                title=title,
                category=request.category,
                overrides=request.overrides,
            )
            return prompt, True

    async def _generate_with(self, method: str, prompt: str) -> GeneratedImage:
        if method == METHOD_GEMINI:
            if not self.gemini.is_configured:
                raise ProviderUnavailableError(self.gemini.API_NAME)
            image = await self.gemini.generate_image(prompt)
            return GeneratedImage(
                method=METHOD_GEMINI,
                prompt=prompt,
                message=GEMINI_READY_MESSAGE,
                image_base64=image.data,
                mime_type=image.mime_type,
            )

        if not self.openai_images.is_configured:
            raise ProviderUnavailableError(f"{self.openai_images.API_NAME} (DALL-E 3)")
        image_url = await self.openai_images.generate_image(prompt)
        return GeneratedImage(
            method=METHOD_DALLE3,
            prompt=prompt,
            message=DALLE_READY_MESSAGE,
            image_url=image_url,
        )

    async def _generate_with_fallback(self, prompt: str) -> GeneratedImage:
        try:
            return await self._generate_with(METHOD_GEMINI, prompt)
        except ProviderUnavailableError as exc:
            reason = exc.message
        except Exception as exc:
            if not is_recoverable_provider_error(exc):
                raise
            reason = getattr(exc, "upstream_message", None) or str(exc)

        logger.warning(
            "Primary image provider failed, falling back",
            extra={"primary": METHOD_GEMINI, "secondary": METHOD_DALLE3, "reason": reason},
        )
        if not self.openai_images.is_configured:
            raise AllProvidersUnavailableError(
                PROVIDER_LABELS[METHOD_GEMINI],
                PROVIDER_LABELS[METHOD_DALLE3],
                reason,
            )

        result = await self._generate_with(METHOD_DALLE3, prompt)
        result.fallback = True
        result.fallback_reason = reason
        return result

    @staticmethod
    def _status_message(result: GeneratedImage) -> str:
        notes: list[str] = []
        if result.prompt_fallback:
            notes.append("AI prompt generation failed; used the static brand prompt.")
        if result.fallback:
            notes.append(
                f"{PROVIDER_LABELS[METHOD_GEMINI]} unavailable ({result.fallback_reason}); "
                f"generated with {PROVIDER_LABELS[METHOD_DALLE3]} instead."
            )
        ready = GEMINI_READY_MESSAGE if result.method == METHOD_GEMINI else DALLE_READY_MESSAGE
        notes.append(ready)
        return " ".join(notes)
