"""Shared plumbing for JSON-over-HTTP AI provider clients."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from blog_assist.config import settings
from blog_assist.core.exceptions import (
    ExternalAPIError,
    ProviderTimeoutError,
    ProviderUnavailableError,
    RateLimitExceededError,
)

logger = logging.getLogger(__name__)


class ProviderHTTPClient(ABC):
    """Base class for provider clients.

    Subclasses set ``API_NAME`` and implement ``_auth_headers``. The underlying
    ``httpx.AsyncClient`` is opened on first use and reused until ``aclose``;
    a missing API key never fails construction, only calls.
    """

    API_NAME = "Provider"

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.provider_timeout_seconds
        self._client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        """Authentication headers sent with every request."""

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ProviderUnavailableError(self.API_NAME)
        return self.api_key

    async def __aenter__(self) -> ProviderHTTPClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._require_api_key()
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={
                    **self._auth_headers(),
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _post_json(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload and return the decoded object body."""
        self._require_api_key()
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = await self.client.post(url, json=payload)
        except httpx.TimeoutException as exc:
            logger.warning(
                "Provider request timed out",
                extra={"provider": self.API_NAME, "path": path},
            )
            raise ProviderTimeoutError(self.API_NAME, f"Request timeout: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "Provider HTTP error",
                extra={"provider": self.API_NAME, "path": path, "error": str(exc)},
            )
            raise ExternalAPIError(self.API_NAME, str(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ExternalAPIError(
                self.API_NAME,
                f"Invalid JSON response with status {response.status_code}",
                status_code=response.status_code,
            ) from exc

        if response.status_code >= 400:
            message = provider_error_message(body, response.status_code)
            logger.warning(
                "Provider API error",
                extra={
                    "provider": self.API_NAME,
                    "path": path,
                    "status": response.status_code,
                    "error": message,
                },
            )
            if response.status_code == 429:
                raise RateLimitExceededError(self.API_NAME, message)
            raise ExternalAPIError(self.API_NAME, message, status_code=response.status_code)

        if not isinstance(body, dict):
            raise ExternalAPIError(self.API_NAME, "Unexpected non-object response")
        return body


def provider_error_message(body: Any, status_code: int) -> str:
    """Format a provider error body as ``[status] message``.

    Google and OpenAI both wrap failures as ``{"error": {"message": ...}}``.
    """
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return f"[{status_code}] {error['message']}"
        if isinstance(error, str):
            return f"[{status_code}] {error}"
    return f"[{status_code}] request_failed"
