"""Tests for the Gemini text completion agent and its error mapping."""

from __future__ import annotations

import httpx
import pytest
from pydantic_ai.exceptions import ModelHTTPError

from blog_assist.agents.text_completion import TextCompletionAgent
from blog_assist.config import settings
from blog_assist.core.exceptions import (
    ExternalAPIError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    RateLimitExceededError,
)
from blog_assist.services.featured_image_generation import is_recoverable_provider_error


class _FakeUsage:
    input_tokens = 12
    output_tokens = 3
    total_tokens = 15


class _FakeResult:
    def __init__(self, output: str) -> None:
        self.output = output

    def usage(self) -> _FakeUsage:
        return _FakeUsage()


class _RecordingAgent:
    def __init__(self, reply: str = "ok") -> None:
        self.reply = reply
        self.prompts: list[str] = []

    async def run(self, prompt: str) -> _FakeResult:
        self.prompts.append(prompt)
        return _FakeResult(self.reply)


class _FailingAgent:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def run(self, prompt: str) -> _FakeResult:
        raise self.error


def test_model_name_defaults_to_configured_text_model() -> None:
    agent = TextCompletionAgent(api_key="g-test")

    assert agent.model_name == settings.gemini_text_model
    assert TextCompletionAgent(api_key="g-test", model_override="gemini-pro").model_name == "gemini-pro"


@pytest.mark.asyncio
async def test_missing_key_raises_before_model_is_built(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "gemini_api_key", None)
    agent = TextCompletionAgent()

    assert agent.is_configured is False
    with pytest.raises(ProviderUnavailableError, match="Gemini not configured"):
        await agent.complete("Say hi")
    assert agent._agent is None


@pytest.mark.asyncio
async def test_complete_returns_model_output() -> None:
    agent = TextCompletionAgent(api_key="g-test")
    fake_agent = _RecordingAgent(reply="A short excerpt.")
    agent._agent = fake_agent  # type: ignore[assignment]

    output = await agent.complete("Summarize this")

    assert output == "A short excerpt."
    assert fake_agent.prompts == ["Summarize this"]


@pytest.mark.asyncio
async def test_quota_error_maps_to_recoverable_rate_limit() -> None:
    agent = TextCompletionAgent(api_key="g-test")
    agent._agent = _FailingAgent(  # type: ignore[assignment]
        ModelHTTPError(
            status_code=429,
            model_name="gemini-2.5-flash",
            body={"error": {"message": "quota"}},
        )
    )

    with pytest.raises(RateLimitExceededError) as exc_info:
        await agent.complete("prompt")

    assert exc_info.value.status_code == 429
    assert exc_info.value.upstream_message == "[429] quota"
    assert is_recoverable_provider_error(exc_info.value) is True


@pytest.mark.asyncio
async def test_overloaded_model_keeps_status_code() -> None:
    agent = TextCompletionAgent(api_key="g-test")
    agent._agent = _FailingAgent(  # type: ignore[assignment]
        ModelHTTPError(
            status_code=503,
            model_name="gemini-2.5-flash",
            body={"error": {"message": "The model is overloaded."}},
        )
    )

    with pytest.raises(ExternalAPIError) as exc_info:
        await agent.complete("prompt")

    assert not isinstance(exc_info.value, RateLimitExceededError)
    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Gemini API error: [503] The model is overloaded."
    assert is_recoverable_provider_error(exc_info.value) is True


@pytest.mark.asyncio
async def test_client_error_is_not_recoverable() -> None:
    agent = TextCompletionAgent(api_key="g-test")
    agent._agent = _FailingAgent(  # type: ignore[assignment]
        ModelHTTPError(
            status_code=400,
            model_name="gemini-2.5-flash",
            body={"error": {"message": "API key not valid"}},
        )
    )

    with pytest.raises(ExternalAPIError) as exc_info:
        await agent.complete("prompt")

    assert exc_info.value.status_code == 400
    assert is_recoverable_provider_error(exc_info.value) is False


@pytest.mark.asyncio
async def test_transport_timeout_maps_to_provider_timeout() -> None:
    agent = TextCompletionAgent(api_key="g-test")
    agent._agent = _FailingAgent(httpx.ReadTimeout("timed out"))  # type: ignore[assignment]

    with pytest.raises(ProviderTimeoutError):
        await agent.complete("prompt")
