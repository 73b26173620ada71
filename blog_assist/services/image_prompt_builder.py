"""Utilities to build brand-consistent image-generation prompts."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from blog_assist.services.brand_profiles import (
    BrandProfile,
    resolve_brand_profile,
    resolve_category_template,
    static_fallback_scene,
)

if TYPE_CHECKING:
    from blog_assist.services.text_generation import TextGenerationService

logger = logging.getLogger(__name__)

CONTENT_CONTEXT_CHARS = 800
IMAGE_FORMAT = "1792x1024"

_CODE_FENCE_RE = re.compile(r"```[^\n]*\n|```")


@dataclass(frozen=True, slots=True)
class BrandOverrides:
    """Caller-supplied visual overrides; empty fields keep the profile default."""

    style: str | None = None
    colors: str | None = None
    avoid: str | None = None
    composition: str | None = None


@dataclass(frozen=True, slots=True)
class VisualDirection:
    """Brand profile merged with caller overrides."""

    profile: BrandProfile
    style: str
    colors: str
    avoid: str
    composition: str


def merge_visual_direction(
    profile: BrandProfile,
    overrides: BrandOverrides | None = None,
) -> VisualDirection:
    """Apply overrides field-by-field over the profile defaults."""
    overrides = overrides or BrandOverrides()
    return VisualDirection(
        profile=profile,
        style=_normalize(overrides.style) or profile.visual_style,
        colors=_normalize(overrides.colors) or profile.color_palette,
        avoid=_normalize(overrides.avoid) or profile.avoid_text,
        composition=_normalize(overrides.composition) or profile.composition,
    )


def uniformity_suffix(colors: str) -> str:
    """Closing clause appended to every final image prompt."""
    return (
        " | Professional blog header photograph"
        f" | {IMAGE_FORMAT} wide landscape format"
        " | Shot on Canon EOS R5, 35mm f/2.8 lens"
        " | Natural lighting, golden hour, soft shadows"
        f" | {colors} color palette"
        " | Real environment setting"
        " | Professional editorial photography"
        " | High-resolution DSLR image quality"
        " | NO cartoon, illustration, 3D render, CGI, or animated style"
        " | NO text, logos, or direct face shots"
        " | Photojournalism aesthetic"
    )


def build_image_meta_prompt(
    *,
    title: str,
    content: str,
    category: str | None,
    direction: VisualDirection,
) -> str:
    """Build the instruction asking the text model to draft an image prompt."""
    profile = direction.profile
    category_template = resolve_category_template(category)
    excerpt = (content or "")[:CONTENT_CONTEXT_CHARS]

    if profile.include_humans:
        people_rule = "Show people from behind or at angles (no direct faces)"
    else:
        people_rule = "NO people's faces or hands"

    sections = [
        "Create a professional blog header image for this specific article:",
        f"BRAND: {profile.name}\nTARGET AUDIENCE: {profile.target_audience}\nTONE: {profile.tone}",
        f'ARTICLE TITLE (PRIMARY FOCUS): "{title}"',
        f"Category: {category or 'general'}\nVisual Template: {category_template}",
        f"Content Summary:\n{excerpt}",
        "TASK: Write an image-generation prompt that directly visualizes the article title.",
        "MANDATORY REQUIREMENTS:",
        (
            "1. TITLE-DRIVEN CONCEPT (MOST IMPORTANT)\n"
            f'   - The image MUST visually represent "{title}"\n'
            "   - Every element should support the title's message\n"
            "   - Be specific to THIS exact title, not generic to the category"
        ),
        (
            "2. CATEGORY VISUAL STYLE (for uniformity):\n"
            f"   - Use this template: {category_template}\n"
            f'   - Adapt the template specifically for "{title}"'
        ),
        (
            "3. STRICT VISUAL STANDARDS (same for ALL images):\n"
            f"   Base Colors: {direction.colors}\n"
            f"   Style: {direction.style}\n"
            f"   Composition: {direction.composition}\n"
            f"   Tone: {profile.tone}\n"
            f"   Format: Wide landscape ({IMAGE_FORMAT}), perfect for blog header\n"
            "   Quality: professional editorial photography, real locations\n"
            "   Lighting: natural daylight with soft diffused lighting"
        ),
        (
            "4. COMPOSITIONAL UNIFORMITY:\n"
            "   - Central focal point at golden ratio\n"
            "   - Subject occupies 60-70% of frame\n"
            "   - Breathing room around edges (10% margin)\n"
            "   - Professional negative space usage"
        ),
        (
            "5. ABSOLUTE PROHIBITIONS:\n"
            f"   - NO {direction.avoid}\n"
            "   - NO text, numbers, or letters anywhere in the image\n"
            "   - NO company logos or brands\n"
            f"   - {people_rule}\n"
            "   - NO cliche imagery (handshakes, climbing arrows, lightbulbs)\n"
            "   - NO cartoon, illustration, 3D render, CGI, or animated styles"
        ),
    ]

    if profile.include_humans and profile.human_representation:
        sections.append(
            "6. HUMAN REPRESENTATION (REQUIRED):\n"
            f"   - Include {profile.human_representation}\n"
            f"   - Make it relatable to {profile.target_audience}\n"
            "   - People should be shown from behind or at angles (no direct face shots)"
        )

    if profile.additional_guidelines:
        sections.append(f"ADDITIONAL BRAND GUIDELINES:\n{profile.additional_guidelines}")

    sections.append(
        "OUTPUT INSTRUCTIONS:\n"
        f'Write a detailed 150-200 word prompt that opens with the main concept of "{title}", '
        "describes a professional photography scene, specifies camera, lens and lighting, "
        f"includes exact color codes and composition details, appeals to {profile.target_audience}, "
        f"keeps a {profile.tone} tone and explicitly prohibits illustrated or rendered styles. "
        "Return only the prompt text.\n\nImage prompt:"
    )

    return "\n\n".join(sections)


def static_fallback_prompt(
    *,
    collection_type: str | None,
    title: str,
    category: str | None = None,
    overrides: BrandOverrides | None = None,
) -> str:
    """Deterministic prompt used when the AI-drafted prompt is unavailable."""
    direction = merge_visual_direction(resolve_brand_profile(collection_type), overrides)
    scene = static_fallback_scene(collection_type)
    theme = resolve_category_template(category)
    prompt = f'{scene} The image visually represents the article "{_normalize(title)}". Visual theme: {theme}.'
    return f"{prompt}{uniformity_suffix(direction.colors)}"


def clean_model_prompt(raw: str) -> str:
    """Strip markdown code fences the model may wrap around its answer."""
    return _CODE_FENCE_RE.sub("", raw or "").strip()


class ImagePromptComposer:
    """Have the text model draft a detailed image prompt for an article."""

    def __init__(self, text_generator: TextGenerationService) -> None:
        self.text_generator = text_generator

    async def compose(
        self,
        *,
        title: str,
        content: str = "",
        overrides: BrandOverrides | None = None,
        category: str | None = None,
        collection_type: str | None = None,
    ) -> str:
        """Return the final image prompt; text-model errors propagate."""
        profile = resolve_brand_profile(collection_type)
        direction = merge_visual_direction(profile, overrides)
        meta_prompt = build_image_meta_prompt(
            title=title,
            content=content,
            category=category,
            direction=direction,
        )

        drafted = clean_model_prompt(await self.text_generator.complete(meta_prompt))
        logger.info(
            "Image prompt drafted",
            extra={
                "brand": profile.name,
                "category": category or "general",
                "prompt_length": len(drafted),
            },
        )
        return f"{drafted}{uniformity_suffix(direction.colors)}"


def _normalize(value: str | None) -> str:
    return " ".join(str(value or "").split())
