"""
API exception handlers.

This module renders every error from the HTTP surface as
``{"success": false, "error": ..., "code": ..., "message": ...}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, MethodNotAllowed, NotFound
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AdminRequiredError,
    AuthError,
    ConflictError,
    DomainException,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

ENDPOINT_NOT_FOUND = "Endpoint not found"

CATEGORY_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AdminRequiredError, status.HTTP_403_FORBIDDEN),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (RateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
)


def error_body(error: str, code: str, message: Optional[str] = None) -> Dict[str, Any]:
    return {"success": False, "error": error, "code": code, "message": message or error}


def status_for(exc: DomainException) -> int:
    """HTTP status for a domain exception category."""
    for category, status_code in CATEGORY_STATUS:
        if isinstance(exc, category):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    request = context.get("request")
    path = request.path if request is not None else ""
    correlation_id = getattr(request, "correlation_id", None)

    if isinstance(exc, DomainException):
        status_code = status_for(exc)
        if status_code >= 500:
            return _handle_unexpected_exception(exc, path, correlation_id)
        logger.warning(
            "Domain exception: %s - %s",
            exc.code,
            exc.message,
            extra={"correlation_id": correlation_id, "path": path},
        )
        errors_total.labels(error_type=exc.code, endpoint=path).inc()
        return Response(error_body(exc.message, exc.code), status=status_code)

    if isinstance(exc, (Http404, NotFound, MethodNotAllowed)):
        method = request.method if request is not None else ""
        return Response(
            error_body(ENDPOINT_NOT_FOUND, "NOT_FOUND", f"No route for {method} {path}"),
            status=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(exc, APIException):
        response = exception_handler(exc, context)
        if response is not None:
            code = str(exc.default_code).upper().replace("-", "_")
            detail = exc.detail if isinstance(exc.detail, str) else exc.default_detail
            response.data = error_body(str(detail), code)
            return response

    return _handle_unexpected_exception(exc, path, correlation_id)


def _handle_unexpected_exception(
    exc: Exception, path: str, correlation_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error(
        "Unexpected error: %s",
        exc,
        extra={"correlation_id": correlation_id, "path": path},
        exc_info=True,
    )
    errors_total.labels(error_type="internal_error", endpoint=path).inc()
    return Response(
        error_body("Internal server error", "INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
