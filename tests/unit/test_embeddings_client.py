"""Unit tests for OpenAI embeddings and image clients."""

from __future__ import annotations

from typing import Any

import pytest

from blog_assist.config import settings
from blog_assist.core.exceptions import ExternalAPIError, ProviderUnavailableError
from blog_assist.integrations.embeddings import EmbeddingsClient
from blog_assist.integrations.openai_images import OpenAIImageClient


def _fake_async_client(captured: dict[str, Any], body: dict[str, Any], status_code: int = 200) -> type:
    class FakeResponse:
        def __init__(self) -> None:
            self.status_code = status_code

        def json(self) -> dict[str, Any]:
            return body

    class FakeAsyncClient:
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            captured["init"] = {"args": args, "kwargs": kwargs}

        async def post(self, url: str, json: dict[str, Any]) -> FakeResponse:
            captured["post"] = {"url": url, "json": json}
            return FakeResponse()

        async def aclose(self) -> None:
            return None

    return FakeAsyncClient


@pytest.mark.asyncio
async def test_embeddings_client_posts_model_and_sorts_by_index(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Embeddings client calls the embeddings endpoint and restores input order."""
    captured: dict[str, Any] = {}
    body = {
        # Out-of-order indices to verify client sorting behavior.
        "data": [
            {"index": 1, "embedding": [0.2, 0.3]},
            {"index": 0, "embedding": [0.1, 0.2]},
        ]
    }
    monkeypatch.setattr(
        "blog_assist.integrations.base.httpx.AsyncClient",
        _fake_async_client(captured, body),
    )

    async with EmbeddingsClient(api_key="sk-test-key", base_url="https://api.example/v1/") as client:
        vectors = await client.get_embeddings(["alpha", "beta"])

    assert captured["post"]["url"] == "https://api.example/v1/embeddings"
    assert captured["post"]["json"]["model"] == settings.embeddings_model
    assert captured["post"]["json"]["input"] == ["alpha", "beta"]
    assert captured["init"]["kwargs"]["headers"]["Authorization"] == "Bearer sk-test-key"
    assert vectors == [[0.1, 0.2], [0.2, 0.3]]


@pytest.mark.asyncio
async def test_embed_returns_single_vector(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}
    monkeypatch.setattr(
        "blog_assist.integrations.base.httpx.AsyncClient",
        _fake_async_client(captured, {"data": [{"index": 0, "embedding": [0.5, 0.5, 0.0]}]}),
    )

    vector = await EmbeddingsClient(api_key="sk-test-key").embed("query")

    assert vector == [0.5, 0.5, 0.0]
    assert captured["post"]["json"]["input"] == ["query"]


@pytest.mark.asyncio
async def test_embeddings_client_without_key_fails_on_use(monkeypatch: pytest.MonkeyPatch) -> None:
    """Missing key never fails construction, only the request."""
    monkeypatch.setattr(settings, "openai_api_key", None)

    client = EmbeddingsClient()

    assert client.is_configured is False
    with pytest.raises(ProviderUnavailableError, match="OpenAI Embeddings not configured"):
        await client.embed("query")


@pytest.mark.asyncio
async def test_image_client_sends_dalle_defaults_and_returns_url(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: dict[str, Any] = {}
    monkeypatch.setattr(
        "blog_assist.integrations.base.httpx.AsyncClient",
        _fake_async_client(captured, {"data": [{"url": "https://images.example/abc.png"}]}),
    )

    url = await OpenAIImageClient(api_key="sk-test-key").generate_image("A calm office")

    assert url == "https://images.example/abc.png"
    payload = captured["post"]["json"]
    assert captured["post"]["url"].endswith("/images/generations")
    assert payload["model"] == settings.openai_image_model
    assert payload["n"] == 1
    assert payload["size"] == settings.openai_image_size
    assert payload["quality"] == settings.openai_image_quality
    assert payload["style"] == settings.openai_image_style


@pytest.mark.asyncio
async def test_image_client_error_carries_upstream_message(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}
    body = {"error": {"message": "Your request was rejected by the safety system."}}
    monkeypatch.setattr(
        "blog_assist.integrations.base.httpx.AsyncClient",
        _fake_async_client(captured, body, status_code=400),
    )

    with pytest.raises(ExternalAPIError) as exc_info:
        await OpenAIImageClient(api_key="sk-test-key").generate_image("prompt")

    assert exc_info.value.status_code == 400
    assert "rejected by the safety system" in exc_info.value.message
