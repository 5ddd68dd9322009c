"""
URL configuration for license validation endpoints.
"""

from django.urls import path

from api.v1.validation import views

urlpatterns = [
    path("validate", views.ValidateLicenseView.as_view(), name="validate-license"),
    path("validate/batch", views.BatchValidateView.as_view(), name="validate-license-batch"),
    path("license/<str:key>", views.LicenseDetailView.as_view(), name="license-detail"),
]
