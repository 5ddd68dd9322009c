"""
API key authentication middleware.

Views opt in with ``api_key_required = True``. The token comes from the
``X-API-Key`` header; an authenticated request carries the credential
as ``request.api_credential``.
"""

import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.context import get_app_context
from core.domain.exceptions import AuthError
from core.metrics import errors_total
from core.middleware.rate_limit import check_rate_limit, rate_limited_response
from credentials.application.commands.api_credential_commands import (
    AuthenticateApiCredentialCommand,
)
from credentials.application.handlers.api_credential_handlers import (
    AuthenticateApiCredentialHandler,
)

logger = logging.getLogger(__name__)


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for API key authentication.

    This middleware:
    1. Skips views that do not declare ``api_key_required``
    2. Returns 401 when the key is missing, unknown or revoked
    3. Applies the credential's own request quota
    """

    def process_view(
        self, request: HttpRequest, view_func, view_args, view_kwargs
    ) -> Optional[HttpResponse]:
        view_class = getattr(view_func, "view_class", None)
        if not getattr(view_class, "api_key_required", False):
            return None

        context = get_app_context()
        handler = AuthenticateApiCredentialHandler(
            credential_repository=context.credential_repository, clock=context.clock
        )
        try:
            credential = handler.handle(
                AuthenticateApiCredentialCommand(token=request.headers.get("X-API-Key"))
            )
        except AuthError as e:
            errors_total.labels(error_type=e.code, endpoint=request.path).inc()
            return JsonResponse(
                {"success": False, "error": e.message, "code": e.code},
                status=401,
            )

        decision = check_rate_limit(
            f"credential:{credential.token_hash}",
            credential.quota_per_window,
            settings.API_RATE_LIMIT_WINDOW,
        )
        if not decision.allowed:
            logger.warning(
                "API key over quota: %s...",
                credential.token_prefix[:8],
                extra={"quota": credential.quota_per_window},
            )
            return rate_limited_response(request, decision)

        request.api_credential = credential  # type: ignore
        return None
