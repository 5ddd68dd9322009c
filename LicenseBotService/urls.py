"""
URL configuration for LicenseBotService project.
"""
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from core.views import EndpointNotFoundView, HealthView, MetricsView

urlpatterns = [
    # Health and metrics
    path("health", HealthView.as_view(), name="health"),
    path("metrics", MetricsView.as_view(), name="metrics"),
    # OpenAPI Schema
    path("api/schema", SpectacularAPIView.as_view(), name="schema"),
    # Swagger UI
    path("api/docs", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # API endpoints
    path("api/", include("api.v1.validation.urls")),
    # Everything else
    re_path(r"^.*$", EndpointNotFoundView.as_view(), name="endpoint-not-found"),
]
