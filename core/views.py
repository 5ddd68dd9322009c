"""
Core views for health checks, metrics and unmatched routes.
"""

import time

from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

import LicenseBotService


def endpoint_not_found(request) -> JsonResponse:
    return JsonResponse(
        {
            "success": False,
            "error": "Endpoint not found",
            "code": "NOT_FOUND",
            "message": f"The endpoint {request.method} {request.path} does not exist",
        },
        status=404,
    )


class JsonView(View):
    """Views whose unsupported methods answer like unmatched routes."""

    def http_method_not_allowed(self, request, *args, **kwargs):
        return endpoint_not_found(request)


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(JsonView):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse(
            {
                "success": True,
                "status": "operational",
                "timestamp": int(time.time() * 1000),
                "version": LicenseBotService.__version__,
            }
        )


class MetricsView(JsonView):
    """Prometheus exposition endpoint."""

    def get(self, _request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)


@method_decorator(csrf_exempt, name="dispatch")
class EndpointNotFoundView(View):
    """Catch-all for routes that match nothing else."""

    def dispatch(self, request, *args, **kwargs):
        return endpoint_not_found(request)
