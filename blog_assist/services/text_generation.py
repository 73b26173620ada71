"""Text generation for SEO metadata, excerpts and long-form drafts."""

from __future__ import annotations

import json
import logging
import re

from pydantic import ValidationError as PydanticValidationError

from blog_assist.agents.text_completion import TextCompletionAgent
from blog_assist.core.exceptions import MalformedResponseError, ValidationError
from blog_assist.schemas.ai import SEOMetadata

logger = logging.getLogger(__name__)

SEO_CONTENT_PREVIEW_CHARS = 500
EXCERPT_CONTENT_PREVIEW_CHARS = 2000
DEFAULT_EXCERPT_LENGTH = 300

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*$", re.MULTILINE)
_MARKDOWN_HEADING_RE = re.compile(r"^#{2,3}\s+", re.MULTILINE)
_MARKDOWN_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_MARKDOWN_ITALIC_RE = re.compile(r"\*(.*?)\*")


class TextGenerationService:
    """Prompt the Gemini text model for authoring tasks.

    Every operation makes exactly one upstream call. A missing key raises
    ``ProviderUnavailableError`` and upstream failures surface as
    ``ExternalAPIError`` with the provider message.
    """

    def __init__(self, agent: TextCompletionAgent) -> None:
        self.agent = agent

    @property
    def is_configured(self) -> bool:
        return self.agent.is_configured

    async def complete(self, prompt: str) -> str:
        """Free-form completion."""
        return await self.agent.complete(prompt)

    async def generate_seo(self, title: str, content: str) -> SEOMetadata:
        """Generate a meta title and description for an article."""
        title = _require_text(title, "Title and content required")
        content = _require_text(content, "Title and content required")

        prompt = (
            "Generate SEO metadata for this article:\n"
            f"Title: {title}\n"
            f"Content preview: {content[:SEO_CONTENT_PREVIEW_CHARS]}\n\n"
            "Return ONLY a JSON object with:\n"
            "- metaTitle (max 60 chars, compelling)\n"
            "- metaDescription (max 160 chars, includes keywords)\n\n"
            "JSON:"
        )
        raw = await self.complete(prompt)
        return parse_seo_metadata(raw, api_name=self.agent.api_name)

    async def generate_excerpt(
        self,
        content: str,
        max_length: int = DEFAULT_EXCERPT_LENGTH,
    ) -> str:
        """Summarize content; the result never exceeds ``max_length`` characters."""
        content = _require_text(content, "Content required")
        if max_length < 0:
            raise ValidationError("maxLength must be zero or greater")
        if max_length == 0:
            return ""

        prompt = (
            f"Summarize this article in {max_length} characters or less. "
            "Make it engaging and informative:\n\n"
            f"{content[:EXCERPT_CONTENT_PREVIEW_CHARS]}\n\n"
            "Summary:"
        )
        summary = await self.complete(prompt)
        return summary.strip()[:max_length]

    async def generate_blog_draft(
        self,
        topic: str,
        keywords: list[str] | None = None,
        outline: str = "",
    ) -> str:
        """Write a 1200-1500 word HTML article body."""
        topic = _require_text(topic, "Topic required")
        keywords = [keyword.strip() for keyword in keywords or [] if keyword and keyword.strip()]

        keywords_text = f"\nKeywords to include: {', '.join(keywords)}" if keywords else ""
        outline_text = f"\nOutline/Structure: {outline.strip()}" if outline and outline.strip() else ""

        prompt = (
            "Write a comprehensive, engaging blog article on the following topic:\n\n"
            f"Topic: {topic}{keywords_text}{outline_text}\n\n"
            "Requirements:\n"
            "- Length: 1200-1500 words minimum\n"
            "- Structure: Include an introduction, 3-5 main sections with H2 headings, and a conclusion\n"
            "- Use H3 subheadings where appropriate for better organization\n"
            "- Write in a professional but conversational tone\n"
            "- Include practical insights, examples, or actionable takeaways\n"
            "- Make it SEO-friendly by naturally incorporating keywords\n"
            "- Use short paragraphs (2-4 sentences) for readability\n\n"
            "IMPORTANT: Format the article in HTML with proper semantic tags:\n"
            "- Use <h2> for main section headings\n"
            "- Use <h3> for subsection headings\n"
            "- Use <p> for paragraphs\n"
            "- Use <ul> and <li> for bullet lists\n"
            "- Use <strong> for emphasis\n"
            "- Do NOT include <h1> tags (title is separate)\n"
            "- Do NOT include <html>, <head>, or <body> tags (content only)\n\n"
            "Return only the HTML content, ready to be inserted into a rich text editor.\n\n"
            "Article:"
        )
        raw = await self.complete(prompt)
        html = normalize_draft_html(raw)
        logger.info(
            "Blog draft generated",
            extra={"keyword_count": len(keywords), "html_length": len(html)},
        )
        return html


def parse_seo_metadata(raw: str, *, api_name: str = "Gemini") -> SEOMetadata:
    """Parse the first JSON object in a model reply into SEO metadata.

    Prose before or after the object is ignored, including stray braces.
    """
    text = raw or ""
    decoder = json.JSONDecoder()
    data: object = None
    start = text.find("{")
    while start != -1:
        try:
            data, _ = decoder.raw_decode(text, start)
            break
        except json.JSONDecodeError:
            start = text.find("{", start + 1)

    if not isinstance(data, dict):
        raise MalformedResponseError(api_name, "Invalid response format")

    try:
        return SEOMetadata.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning("Unparseable SEO response", extra={"error": str(exc)})
        raise MalformedResponseError(api_name, f"Invalid response format: {exc}") from exc


def normalize_draft_html(raw: str) -> str:
    """Convert markdown artifacts the model slips into its HTML."""
    html = _CODE_FENCE_RE.sub("", raw or "")
    html = _MARKDOWN_HEADING_RE.sub("", html)
    html = _MARKDOWN_BOLD_RE.sub(r"<strong>\1</strong>", html)
    html = _MARKDOWN_ITALIC_RE.sub(r"<em>\1</em>", html)
    return html.strip()


def _require_text(value: str | None, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value)
