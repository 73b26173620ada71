"""Static brand profiles, category visual templates and fallback prompts.

Every collection maps to exactly one ``BrandProfile``. Unknown collections
resolve to ``DEFAULT_BRAND_PROFILE``, which never includes people.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class CollectionType(str, Enum):
    """Article collections that carry their own visual identity."""

    YAICOS = "yaicos-article"
    AMABEX = "amabex-article"
    GUARDSCAN = "guardscan-article"

    @classmethod
    def parse(cls, value: str | None) -> CollectionType | None:
        if not value:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class BrandProfile:
    """Fixed visual and tonal identity of one content collection."""

    name: str
    target_audience: str
    tone: str
    visual_style: str
    color_palette: str
    include_humans: bool
    human_representation: str | None
    avoid_elements: tuple[str, ...]
    composition: str
    additional_guidelines: str = ""

    @property
    def avoid_text(self) -> str:
        return ", ".join(self.avoid_elements)


DEFAULT_COMPOSITION = "wide landscape format (16:9), centered subject, professional lighting"

_BRAND_PROFILES: dict[CollectionType, BrandProfile] = {
    CollectionType.YAICOS: BrandProfile(
        name="Yaicos",
        target_audience="International students aged 18-30 seeking education and career opportunities",
        tone="friendly and aspirational",
        visual_style=(
            "PROFESSIONAL DOCUMENTARY PHOTOGRAPHY - friendly, welcoming, modern, "
            "educational, vibrant, aspirational"
        ),
        color_palette=(
            "bright blues (#2196F3), warm oranges (#FF9800), energetic yellows (#FFC107), "
            "natural daylight, white backgrounds"
        ),
        include_humans=True,
        human_representation=(
            "REAL diverse international students from Asian, African, European, Latin American, "
            "and Middle Eastern backgrounds, aged 18-30, captured in authentic documentary "
            "photography style, shown from behind or at angles (no direct faces), engaged in "
            "learning activities, collaborative work, campus life, genuine candid moments"
        ),
        avoid_elements=(
            "text",
            "logos",
            "cluttered elements",
            "stock photo poses",
            "cartoon style",
            "illustrations",
            "3D renders",
            "CGI",
            "animated look",
            "plastic appearance",
        ),
        composition=(
            "wide landscape format (16:9), centered subject with people interacting, "
            "bright natural lighting"
        ),
        additional_guidelines=(
            "Use PROFESSIONAL PHOTOGRAPHY ONLY, documentary/photojournalism style. Images should "
            "feel welcoming and inspiring. Show diversity and international representation with "
            "real people in authentic educational or campus settings. Focus on connection, "
            "learning, and opportunity. Natural lighting, real environments, authentic body "
            "language. This must look like an education feature in a major news magazine."
        ),
    ),
    CollectionType.AMABEX: BrandProfile(
        name="Amabex",
        target_audience="Corporate procurement professionals and business decision-makers",
        tone="corporate and professional",
        visual_style="corporate, professional, trustworthy, sophisticated, clean, systematic",
        color_palette=(
            "corporate blues (#003D7A, #0066CC), silver/gray accents (#7C8B9C), white, "
            "minimal use of color"
        ),
        include_humans=False,
        human_representation=None,
        avoid_elements=(
            "text",
            "logos",
            "faces",
            "hands",
            "informal elements",
            "bright colors",
            "consumer imagery",
        ),
        composition=(
            "wide landscape format (16:9), clean centered composition, professional studio "
            "lighting, emphasis on structure and organization"
        ),
        additional_guidelines=(
            "Images should convey trust, efficiency, and professionalism. Use abstract "
            "representations of procurement processes, supply chains, business networks, or "
            "enterprise systems. Focus on structure, data visualization, and systematic "
            "approaches. Maintain a serious, corporate aesthetic similar to Fortune 500 companies."
        ),
    ),
    CollectionType.GUARDSCAN: BrandProfile(
        name="GuardScan",
        target_audience="IT security professionals, system administrators, CISOs, and cybersecurity teams",
        tone="technical and cutting-edge",
        visual_style="technical, secure, high-tech, cutting-edge, sophisticated, dramatic",
        color_palette=(
            "deep blues (#001F3F), cyber green (#00FF41), electric blue (#00D4FF), "
            "dark backgrounds (#0A0E27), neon accents"
        ),
        include_humans=False,
        human_representation=None,
        avoid_elements=(
            "text",
            "logos",
            "faces",
            "hands",
            "generic security symbols",
            "consumer-grade imagery",
            "simple padlocks",
        ),
        composition=(
            "wide landscape format (16:9), centered technical visualization, dramatic lighting "
            "with blue/green accents, high-tech atmosphere"
        ),
        additional_guidelines=(
            "Images should feel technically sophisticated and cutting-edge. Use advanced "
            "visualizations of networks, encryption, data protection, threat detection, and "
            "security systems: circuit patterns, encrypted data streams, network topologies, or "
            "security architecture. Avoid cliche padlock or simple shield imagery. Aim for "
            "enterprise-grade Security Operations Center aesthetics."
        ),
    ),
}

BRAND_PROFILES: MappingProxyType[CollectionType, BrandProfile] = MappingProxyType(_BRAND_PROFILES)

DEFAULT_BRAND_PROFILE = BrandProfile(
    name="the brand",
    target_audience="professional audience",
    tone="professional",
    visual_style="modern, professional, clean",
    color_palette="vibrant blues, whites, subtle gradients",
    include_humans=False,
    human_representation=None,
    avoid_elements=("text", "logos", "faces", "cluttered elements"),
    composition=DEFAULT_COMPOSITION,
)

DEFAULT_CATEGORY = "default"

CATEGORY_TEMPLATES: MappingProxyType[str, str] = MappingProxyType(
    {
        "technology": "Futuristic tech environment with glowing interfaces, circuit patterns, or digital networks",
        "ai-machine-learning": "Neural network visualization, data streams, algorithmic patterns, or AI brain concept",
        "cybersecurity": "Digital shield, encrypted data visualization, security locks, or network protection concept",
        "business": "Modern office environment with growth charts, business strategy elements, or professional workspace",
        "marketing": "Marketing funnel visualization, campaign elements, customer journey map, or brand strategy board",
        "automation": "Automated workflow system, connected processes, robotic arms, or efficiency visualization",
        "cloud-computing": "Cloud infrastructure, server networks, distributed systems, or data center visualization",
        "data-analytics": "Data dashboard, charts and graphs, analytics visualization, or metrics display",
        "software-development": "Code editor interface, development workflow, programming concepts, or software architecture",
        "e-commerce": "Digital storefront, shopping cart visualization, online retail elements, or payment systems",
        "productivity": "Organized workflow, task management board, time optimization, or efficiency tools",
        "social-media": "Social network visualization, engagement metrics, content distribution, or platform interface",
        "seo-sem": "Search results visualization, ranking metrics, keyword clouds, or search algorithm concept",
        DEFAULT_CATEGORY: "Professional abstract representation of the concept with modern design elements",
    }
)

_STATIC_FALLBACK_PROMPTS: dict[CollectionType, str] = {
    CollectionType.YAICOS: (
        "Professional documentary photograph for a Yaicos blog header: a diverse group of "
        "international students aged 18-30 on a bright modern university campus, seen from "
        "behind and at gentle angles as they walk between classes, study together at an outdoor "
        "table and share notes, warm natural daylight, bright blue (#2196F3) and warm orange "
        "(#FF9800) accents in clothing and surroundings, welcoming and aspirational mood."
    ),
    CollectionType.AMABEX: (
        "Professional corporate photograph for an Amabex blog header: a clean, minimal enterprise "
        "environment showing an abstract procurement and supply-chain concept, orderly glass "
        "surfaces, structured network lines and neatly arranged logistics elements, corporate "
        "blue (#003D7A, #0066CC) tones with silver-gray (#7C8B9C) accents on white, soft studio "
        "lighting, trustworthy and systematic mood, no people."
    ),
    CollectionType.GUARDSCAN: (
        "Dramatic high-tech photograph for a GuardScan blog header: a dark Security Operations "
        "Center atmosphere with glowing network topology, encrypted data streams and circuit "
        "patterns, deep blue (#001F3F) background with cyber green (#00FF41) and electric blue "
        "(#00D4FF) neon accents, sharp focus, cutting-edge enterprise security mood, no people."
    ),
}

_GENERIC_FALLBACK_PROMPT = (
    "Professional editorial photograph for a blog header: a clean, modern workspace scene with "
    "an abstract representation of the article concept, vibrant blue and white tones with "
    "subtle gradients, soft natural lighting, uncluttered composition, no people."
)


def resolve_brand_profile(collection_type: str | None) -> BrandProfile:
    """Return the profile for a collection, or the generic default."""
    collection = CollectionType.parse(collection_type)
    if collection is None:
        return DEFAULT_BRAND_PROFILE
    return BRAND_PROFILES[collection]


def resolve_category_template(category: str | None) -> str:
    """Return the visual theme for a category slug, or the default theme."""
    key = str(category or "").strip().lower()
    return CATEGORY_TEMPLATES.get(key, CATEGORY_TEMPLATES[DEFAULT_CATEGORY])


def static_fallback_scene(collection_type: str | None) -> str:
    """Return the hard-coded scene paragraph for a collection."""
    collection = CollectionType.parse(collection_type)
    if collection is None:
        return _GENERIC_FALLBACK_PROMPT
    return _STATIC_FALLBACK_PROMPTS[collection]
