"""Tests for brand-consistent image prompt building."""

from __future__ import annotations

import pytest

from blog_assist.services.brand_profiles import (
    CATEGORY_TEMPLATES,
    DEFAULT_BRAND_PROFILE,
    CollectionType,
    resolve_brand_profile,
    resolve_category_template,
)
from blog_assist.services.image_prompt_builder import (
    BrandOverrides,
    ImagePromptComposer,
    build_image_meta_prompt,
    clean_model_prompt,
    merge_visual_direction,
    static_fallback_prompt,
    uniformity_suffix,
)


class _FakeTextGenerator:
    def __init__(self, reply: str = "A glowing network diagram", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def _meta_prompt(collection_type: str | None, **kwargs: object) -> str:
    direction = merge_visual_direction(resolve_brand_profile(collection_type), kwargs.pop("overrides", None))
    return build_image_meta_prompt(
        title=str(kwargs.get("title", "Zero trust for small teams")),
        content=str(kwargs.get("content", "")),
        category=kwargs.get("category"),  # type: ignore[arg-type]
        direction=direction,
    )


def test_every_collection_resolves_to_its_brand() -> None:
    assert resolve_brand_profile("yaicos-article").name == "Yaicos"
    assert resolve_brand_profile("amabex-article").name == "Amabex"
    assert resolve_brand_profile("guardscan-article").name == "GuardScan"
    assert resolve_brand_profile(" GuardScan-Article ").name == "GuardScan"


@pytest.mark.parametrize("value", [None, "", "newsletter", "guardscan_articles"])
def test_unknown_collection_resolves_to_default_profile(value: str | None) -> None:
    profile = resolve_brand_profile(value)

    assert profile is DEFAULT_BRAND_PROFILE
    assert profile.include_humans is False


def test_only_yaicos_includes_people() -> None:
    with_people = [
        collection for collection in CollectionType if resolve_brand_profile(collection.value).include_humans
    ]

    assert with_people == [CollectionType.YAICOS]


def test_unknown_category_uses_default_template() -> None:
    assert resolve_category_template("cybersecurity").startswith("Digital shield")
    assert resolve_category_template("Cybersecurity") == resolve_category_template("cybersecurity")
    assert resolve_category_template("knitting") == CATEGORY_TEMPLATES["default"]
    assert resolve_category_template(None) == CATEGORY_TEMPLATES["default"]


def test_overrides_replace_only_supplied_fields() -> None:
    profile = resolve_brand_profile("guardscan-article")

    direction = merge_visual_direction(profile, BrandOverrides(colors="  teal   and black ", avoid=""))

    assert direction.colors == "teal and black"
    assert direction.avoid == profile.avoid_text
    assert direction.style == profile.visual_style
    assert direction.composition == profile.composition


def test_meta_prompt_for_amabex_forbids_faces_and_hands() -> None:
    prompt = _meta_prompt("amabex-article", category="business")

    assert "BRAND: Amabex" in prompt
    assert "NO people's faces or hands" in prompt
    assert "faces, hands" in prompt
    assert "HUMAN REPRESENTATION" not in prompt
    assert CATEGORY_TEMPLATES["business"] in prompt
    assert "ADDITIONAL BRAND GUIDELINES" in prompt


def test_meta_prompt_for_yaicos_requests_people_from_behind() -> None:
    prompt = _meta_prompt("yaicos-article", title="Studying abroad on a budget")

    assert "HUMAN REPRESENTATION (REQUIRED)" in prompt
    assert "Show people from behind or at angles" in prompt
    assert "NO people's faces or hands" not in prompt
    assert '"Studying abroad on a budget"' in prompt


def test_meta_prompt_truncates_content_context() -> None:
    prompt = _meta_prompt(None, content="a" * 900 + "TAIL")

    assert "a" * 800 in prompt
    assert "a" * 801 not in prompt
    assert "TAIL" not in prompt
    assert "Category: general" in prompt


def test_uniformity_suffix_carries_colors_and_style_bans() -> None:
    suffix = uniformity_suffix("deep blues")

    assert "deep blues color palette" in suffix
    assert "1792x1024" in suffix
    assert "NO cartoon, illustration, 3D render, CGI, or animated style" in suffix
    assert "NO text, logos, or direct face shots" in suffix


def test_static_fallback_prompt_names_brand_and_title() -> None:
    prompt = static_fallback_prompt(
        collection_type="guardscan-article",
        title="  Patch   Tuesday recap ",
        category="cybersecurity",
    )

    assert "GuardScan" in prompt
    assert 'article "Patch Tuesday recap"' in prompt
    assert CATEGORY_TEMPLATES["cybersecurity"] in prompt
    assert prompt.endswith(uniformity_suffix(resolve_brand_profile("guardscan-article").color_palette))


def test_clean_model_prompt_strips_code_fences() -> None:
    assert clean_model_prompt("```text\nA quiet office at dawn\n```") == "A quiet office at dawn"
    assert clean_model_prompt("  plain  ") == "plain"


@pytest.mark.asyncio
async def test_composer_appends_suffix_to_drafted_prompt() -> None:
    generator = _FakeTextGenerator(reply="```\nEncrypted data streams over a dark grid\n```")
    composer = ImagePromptComposer(generator)  # type: ignore[arg-type]

    prompt = await composer.compose(
        title="Zero trust for small teams",
        content="Body",
        collection_type="guardscan-article",
        overrides=BrandOverrides(colors="neon green"),
    )

    assert prompt.startswith("Encrypted data streams over a dark grid | ")
    assert prompt.endswith(uniformity_suffix("neon green"))
    assert len(generator.prompts) == 1
    assert "BRAND: GuardScan" in generator.prompts[0]


@pytest.mark.asyncio
async def test_composer_propagates_text_model_errors() -> None:
    generator = _FakeTextGenerator(error=RuntimeError("boom"))
    composer = ImagePromptComposer(generator)  # type: ignore[arg-type]

    with pytest.raises(RuntimeError, match="boom"):
        await composer.compose(title="Anything")
