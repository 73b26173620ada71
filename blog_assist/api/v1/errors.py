"""Translate application errors into HTTP responses."""

import logging

from fastapi import HTTPException, status

from blog_assist.core.exceptions import (
    AllProvidersUnavailableError,
    BlogAssistError,
    ProviderUnavailableError,
    SemanticSearchDisabledError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_CLIENT_ERRORS = (ValidationError, ProviderUnavailableError, SemanticSearchDisabledError)


def to_http_exception(exc: BlogAssistError) -> HTTPException:
    """Map an application error to an HTTPException carrying its message."""
    if isinstance(exc, _CLIENT_ERRORS):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    if isinstance(exc, AllProvidersUnavailableError):
        logger.warning("No image provider available", extra=exc.details)
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)

    logger.warning("Upstream generation failed", extra={"error": exc.message, **exc.details})
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message)
