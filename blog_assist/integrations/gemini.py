"""Google Gemini integration for native image generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from blog_assist.config import settings
from blog_assist.core.exceptions import ExternalAPIError, NoImageInResponseError
from blog_assist.integrations.base import ProviderHTTPClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InlineImage:
    """Base64 image payload returned inline by the image model."""

    data: str
    mime_type: str


class GeminiClient(ProviderHTTPClient):
    """Client for the Gemini image model over the ``generateContent`` REST endpoint.

    Text completions go through ``blog_assist.agents``; the agent layer does
    not return inline image parts.
    """

    API_NAME = "Gemini"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        image_model: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(
            api_key=api_key or settings.gemini_api_key,
            base_url=base_url or settings.gemini_base_url,
            timeout=timeout,
        )
        self.image_model = image_model or settings.gemini_image_model

    def _auth_headers(self) -> dict[str, str]:
        return {"x-goog-api-key": self.api_key or ""}

    async def generate_image(self, prompt: str) -> InlineImage:
        """Run the native image model and return the first inline image."""
        logger.info(
            "Gemini image request",
            extra={"model": self.image_model, "prompt_length": len(prompt)},
        )
        body = await self._post_json(
            f"models/{self.image_model}:generateContent",
            {"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
        )
        parts = self._first_candidate_parts(body)
        for part in parts:
            inline = part.get("inlineData") or part.get("inline_data")
            if isinstance(inline, dict) and inline.get("data"):
                mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
                return InlineImage(data=str(inline["data"]), mime_type=str(mime_type))

        logger.warning("Gemini image response without inline data", extra={"model": self.image_model})
        raise NoImageInResponseError(self.API_NAME)

    def _first_candidate_parts(self, body: dict[str, Any]) -> list[dict[str, Any]]:
        candidates = body.get("candidates") or []
        if not candidates:
            feedback = body.get("promptFeedback") or {}
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            raise ExternalAPIError(
                self.API_NAME,
                f"No candidates in response (blockReason={reason})" if reason else "No candidates in response",
            )

        content = candidates[0].get("content") or {}
        parts = content.get("parts") or []
        return [part for part in parts if isinstance(part, dict)]
