"""Probe provider credentials and model access with tiny requests.

Usage:
  GEMINI_API_KEY=... OPENAI_API_KEY=... python scripts/check_provider_access.py

DALL-E 3 renders a billed image, so it is only probed with ``--include-dalle``.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from blog_assist.agents.text_completion import TextCompletionAgent
from blog_assist.config import settings
from blog_assist.core.exceptions import BlogAssistError, ExternalAPIError, ProviderUnavailableError
from blog_assist.core.logging import setup_logging
from blog_assist.integrations.embeddings import EmbeddingsClient
from blog_assist.integrations.gemini import GeminiClient
from blog_assist.integrations.openai_images import OpenAIImageClient

PROBE_TEXT_PROMPT = "Reply with the single word: ok"
PROBE_IMAGE_PROMPT = "A plain light grey square, minimal, no text"

STATUS_HINTS = {
    429: "quota exhausted or rate limited; check billing and per-model limits",
    404: "model not found or not enabled for this key; check the model name",
    403: "key lacks permission for this model or API",
    401: "key rejected; check that it is current",
}


@dataclass(slots=True)
class ProbeResult:
    """Outcome of one probe."""

    name: str
    model: str
    ok: bool
    detail: str


def parse_args() -> argparse.Namespace:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--include-dalle",
        action="store_true",
        help="Also render one DALL-E 3 image (billed)",
    )
    return parser.parse_args()


def describe_error(exc: BlogAssistError) -> str:
    """Human-readable failure text with a hint for well-known status codes."""
    if isinstance(exc, ExternalAPIError) and exc.status_code in STATUS_HINTS:
        return f"{exc.message} (hint: {STATUS_HINTS[exc.status_code]})"
    return exc.message


async def run_probe(name: str, model: str, call: Callable[[], Awaitable[object]]) -> ProbeResult:
    try:
        await call()
    except ProviderUnavailableError as exc:
        return ProbeResult(name=name, model=model, ok=False, detail=f"skipped: {exc.message}")
    except BlogAssistError as exc:
        return ProbeResult(name=name, model=model, ok=False, detail=describe_error(exc))
    return ProbeResult(name=name, model=model, ok=True, detail="ok")


async def async_main(args: argparse.Namespace) -> int:
    results: list[ProbeResult] = []

    text_agent = TextCompletionAgent()
    results.append(
        await run_probe(
            "Gemini text",
            text_agent.model_name,
            lambda: text_agent.complete(PROBE_TEXT_PROMPT),
        )
    )

    async with GeminiClient() as gemini:
        results.append(
            await run_probe(
                "Gemini image",
                gemini.image_model,
                lambda: gemini.generate_image(PROBE_IMAGE_PROMPT),
            )
        )

    async with EmbeddingsClient() as embeddings:
        results.append(
            await run_probe(
                "OpenAI embeddings",
                embeddings.model,
                lambda: embeddings.embed(PROBE_TEXT_PROMPT),
            )
        )

    if args.include_dalle:
        async with OpenAIImageClient() as openai_images:
            results.append(
                await run_probe(
                    "DALL-E 3",
                    openai_images.model,
                    lambda: openai_images.generate_image(PROBE_IMAGE_PROMPT, size="1024x1024"),
                )
            )
    else:
        print(f"DALL-E 3 ({settings.openai_image_model}): not probed, pass --include-dalle")

    for result in results:
        verdict = "OK  " if result.ok else "FAIL"
        print(f"[{verdict}] {result.name} ({result.model}): {result.detail}")

    failures = [result for result in results if not result.ok]
    if failures:
        print(f"{len(failures)} of {len(results)} probes failed", file=sys.stderr)
        return 1
    return 0


def main() -> int:
    setup_logging("WARNING")
    return asyncio.run(async_main(parse_args()))


if __name__ == "__main__":
    raise SystemExit(main())
