"""Base class for Pydantic AI agents backed by the Gemini text model."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar, cast

import httpx
from pydantic import BaseModel
from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from blog_assist.config import settings
from blog_assist.core.exceptions import (
    ExternalAPIError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    RateLimitExceededError,
)
from blog_assist.integrations.base import provider_error_message

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT")


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """Abstract base class for Pydantic AI agents.

    Each agent should:
    1. Define the system_prompt property
    2. Define the output_type property
    3. Implement _build_prompt to construct the user prompt

    A missing Gemini key never fails construction. ``run`` raises
    ``ProviderUnavailableError`` before any model is built, and model HTTP
    failures surface as ``ExternalAPIError`` carrying the upstream status.
    """

    api_name: str = "Gemini"
    # Explicit model override at the class level
    model: str | None = None
    max_retries: int = 1

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model_override: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key or settings.gemini_api_key
        self._model = model_override or self.model or settings.gemini_text_model
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds
        self._agent: Agent[None, OutputT] | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def agent(self) -> Agent[None, OutputT]:
        """Lazily initialize and return the Pydantic AI agent."""
        if self._agent is None:
            if not self.api_key:
                raise ProviderUnavailableError(self.api_name)
            model = GoogleModel(self._model, provider=GoogleProvider(api_key=self.api_key))
            self._agent = cast(
                Agent[None, OutputT],
                Agent(
                    model=model,
                    output_type=self.output_type,
                    system_prompt=self.system_prompt,
                    retries=self.max_retries,
                    model_settings={"timeout": self.timeout},
                ),
            )
            logger.info(
                "Agent initialized",
                extra={"agent": self.__class__.__name__, "model": self._model},
            )
        return self._agent

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        """System prompt for the agent."""
        pass

    @property
    @abstractmethod
    def output_type(self) -> type[OutputT]:
        """Output type the agent must produce."""
        pass

    @abstractmethod
    def _build_prompt(self, input_data: InputT) -> str:
        """Build the user prompt from input data."""
        pass

    async def run(self, input_data: InputT) -> OutputT:
        """Run the agent once and return its output."""
        if not self.is_configured:
            raise ProviderUnavailableError(self.api_name)

        agent_name = self.__class__.__name__
        prompt = self._build_prompt(input_data)
        logger.info(
            "Prompt built, sending to LLM",
            extra={"agent": agent_name, "prompt_length": len(prompt), "model": self._model},
        )

        t0 = time.perf_counter()
        try:
            result = await self.agent.run(prompt)
        except ModelHTTPError as exc:
            raise self._to_external_error(exc) from exc
        except httpx.TimeoutException as exc:
            logger.warning("Agent request timed out", extra={"agent": agent_name, "model": self._model})
            raise ProviderTimeoutError(self.api_name, f"Request timeout: {exc}") from exc
        except UnexpectedModelBehavior as exc:
            raise ExternalAPIError(self.api_name, exc.message) from exc
        elapsed = time.perf_counter() - t0

        usage = result.usage()
        logger.info(
            "Agent run completed",
            extra={
                "agent": agent_name,
                "duration_s": round(elapsed, 2),
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
                "total_tokens": usage.total_tokens,
            },
        )
        return result.output

    def _to_external_error(self, exc: ModelHTTPError) -> ExternalAPIError:
        body: Any = exc.body
        message = provider_error_message(body, exc.status_code)
        logger.warning(
            "Provider API error",
            extra={"provider": self.api_name, "status": exc.status_code, "error": message},
        )
        if exc.status_code == 429:
            return RateLimitExceededError(self.api_name, message)
        return ExternalAPIError(self.api_name, message, status_code=exc.status_code)
