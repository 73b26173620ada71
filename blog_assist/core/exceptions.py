"""Custom exception classes for the application."""

from typing import Any


class BlogAssistError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Validation Errors
class ValidationError(BlogAssistError):
    """Request data failed local validation."""

    pass


# Provider Errors
class ProviderUnavailableError(BlogAssistError):
    """Provider credential not configured."""

    def __init__(self, api_name: str) -> None:
        self.api_name = api_name
        super().__init__(f"{api_name} not configured", {"provider": api_name})


class ExternalAPIError(BlogAssistError):
    """Error calling external API."""

    def __init__(
        self,
        api_name: str,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        self.api_name = api_name
        self.upstream_message = message
        self.status_code = status_code
        super().__init__(
            f"{api_name} API error: {message}",
            {"provider": api_name, "status_code": status_code},
        )


class RateLimitExceededError(ExternalAPIError):
    """Rate limit or quota exceeded for external API."""

    def __init__(self, api_name: str, message: str = "Rate limit exceeded") -> None:
        super().__init__(api_name, message, status_code=429)


class ProviderTimeoutError(ExternalAPIError):
    """External API did not answer in time."""

    def __init__(self, api_name: str, message: str = "Request timeout") -> None:
        super().__init__(api_name, message)


class MalformedResponseError(ExternalAPIError):
    """External API returned structured data that could not be parsed."""

    pass


class NoImageInResponseError(ExternalAPIError):
    """Image provider answered without any inline image payload."""

    def __init__(self, api_name: str) -> None:
        super().__init__(api_name, "No image data in response")


class AllProvidersUnavailableError(BlogAssistError):
    """Every eligible image provider failed or lacks credentials."""

    def __init__(self, primary: str, secondary: str, reason: str) -> None:
        self.primary = primary
        self.secondary = secondary
        self.reason = reason
        super().__init__(
            f"{primary} failed ({reason}) and {secondary} is not configured",
            {"providers": [primary, secondary], "reason": reason},
        )


# Feature Errors
class SemanticSearchDisabledError(BlogAssistError):
    """Semantic search is switched off or lacks an embedding credential."""

    def __init__(self) -> None:
        super().__init__("Semantic search not enabled")
