"""OpenAI DALL-E 3 integration returning hosted image URLs."""

from __future__ import annotations

import logging

from blog_assist.config import settings
from blog_assist.core.exceptions import ExternalAPIError
from blog_assist.integrations.base import ProviderHTTPClient

logger = logging.getLogger(__name__)


class OpenAIImageClient(ProviderHTTPClient):
    """Client for the OpenAI image generation endpoint."""

    API_NAME = "OpenAI"

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
        self.model = model or settings.openai_image_model

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def generate_image(
        self,
        prompt: str,
        *,
        size: str | None = None,
        quality: str | None = None,
        style: str | None = None,
    ) -> str:
        """Generate one image and return its hosted URL.

        Args:
            prompt: Final image prompt.
            size: Pixel dimensions, defaults to the wide 1792x1024 format.
            quality: ``standard`` or ``hd``.
            style: ``vivid`` or ``natural``.

        Returns:
            Temporary URL of the generated image.
        """
        payload = {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": size or settings.openai_image_size,
            "quality": quality or settings.openai_image_quality,
            "style": style or settings.openai_image_style,
        }
        logger.info(
            "OpenAI image generation request",
            extra={"model": self.model, "size": payload["size"], "prompt_length": len(prompt)},
        )
        body = await self._post_json("images/generations", payload)

        data = body.get("data") or []
        url = data[0].get("url") if data and isinstance(data[0], dict) else None
        if not url:
            raise ExternalAPIError(self.API_NAME, "No image URL in response")
        return str(url)
