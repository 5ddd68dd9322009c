"""
License validation API views.

These endpoints are used by third-party integrations to:
- Validate a single license
- Look up license details
- Validate licenses in batches
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import error_body
from api.v1.validation.serializers import (
    BatchValidateRequestSerializer,
    LicenseDetailSerializer,
    ValidateLicenseRequestSerializer,
    ValidLicenseSerializer,
    to_epoch_ms,
)
from core.context import get_app_context
from core.domain.exceptions import TooManyKeysError
from core.metrics import license_validations_total
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.handlers.validate_license_handler import (
    BatchValidateLicensesHandler,
    GetLicenseDetailHandler,
    ValidateLicenseHandler,
)
from licenses.application.queries.validate_license import (
    BatchValidateLicensesQuery,
    GetLicenseDetailQuery,
    ValidateLicenseQuery,
)
from licenses.domain.services import MAX_BATCH_SIZE


API_KEY_HEADER = OpenApiParameter(
    name="X-API-Key",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="API token issued with the api_key command",
)


class ApiKeyProtectedView(APIView):
    """Base view for endpoints behind the API-key middleware."""

    api_key_required = True


class ValidateLicenseView(ApiKeyProtectedView):
    """View for validating one license."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Report whether a license is valid. Precedence: existence, revoked, "
            "not activated, expired."
        ),
        tags=["Validation API"],
        parameters=[API_KEY_HEADER],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: {"description": "Validation outcome"},
            400: {"description": "Missing license_key"},
            401: {"description": "Missing or invalid API key"},
        },
    )
    def post(self, request: Request) -> Response:
        serializer = ValidateLicenseRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                error_body(
                    "Missing license_key",
                    "MISSING_LICENSE_KEY",
                    "Please provide a license_key in the request body",
                ),
                status=status.HTTP_400_BAD_REQUEST,
            )

        context = get_app_context()
        result = ValidateLicenseHandler(
            license_repository=context.license_repository, clock=context.clock
        ).handle(ValidateLicenseQuery(license_key=serializer.validated_data["license_key"]))
        license_validations_total.labels(outcome=result.outcome.value).inc()

        if result.is_valid:
            return Response(
                {
                    "success": True,
                    "valid": True,
                    "license": ValidLicenseSerializer(LicenseDTO.from_entity(result.license)).data,
                }
            )

        body = {"success": True, "valid": False, "reason": result.reason}
        if result.details:
            details = dict(result.details)
            if "expires_at" in details:
                expires_at = details.pop("expires_at")
                details["expiry_date"] = to_epoch_ms(expires_at)
                details["expired_at"] = expires_at.isoformat()
            body["details"] = details
        return Response(body)


class LicenseDetailView(ApiKeyProtectedView):
    """View for license details."""

    @extend_schema(
        operation_id="get_license",
        summary="Get License",
        description="Full license detail with remaining time and validity.",
        tags=["Validation API"],
        parameters=[API_KEY_HEADER],
        responses={
            200: LicenseDetailSerializer,
            401: {"description": "Missing or invalid API key"},
            404: {"description": "License not found"},
        },
    )
    def get(self, request: Request, key: str) -> Response:
        context = get_app_context()
        detail = GetLicenseDetailHandler(
            license_repository=context.license_repository, clock=context.clock
        ).handle(GetLicenseDetailQuery(license_key=key))
        return Response({"success": True, "license": LicenseDetailSerializer(detail).data})


class BatchValidateView(ApiKeyProtectedView):
    """View for batch validation."""

    @extend_schema(
        operation_id="validate_licenses_batch",
        summary="Batch Validate Licenses",
        description=f"Validate up to {MAX_BATCH_SIZE} licenses; results keep input order.",
        tags=["Validation API"],
        parameters=[API_KEY_HEADER],
        request=BatchValidateRequestSerializer,
        responses={
            200: {"description": "Per-key outcomes and counts"},
            400: {"description": "Invalid input or too many keys"},
            401: {"description": "Missing or invalid API key"},
        },
    )
    def post(self, request: Request) -> Response:
        serializer = BatchValidateRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                error_body("Invalid input", "INVALID_INPUT", "license_keys must be an array"),
                status=status.HTTP_400_BAD_REQUEST,
            )

        license_keys = serializer.validated_data["license_keys"]
        context = get_app_context()
        try:
            batch = BatchValidateLicensesHandler(
                license_repository=context.license_repository, clock=context.clock
            ).handle(BatchValidateLicensesQuery(license_keys=license_keys))
        except TooManyKeysError as e:
            return Response(
                error_body("Too many keys", e.code, e.message),
                status=status.HTTP_400_BAD_REQUEST,
            )

        results = []
        for submitted, result in zip(license_keys, batch.results):
            entry = {"key": submitted, "valid": result.is_valid}
            if not result.is_valid:
                entry["reason"] = result.short_reason
            results.append(entry)

        return Response(
            {
                "success": True,
                "total": batch.total,
                "valid_count": batch.valid_count,
                "invalid_count": batch.invalid_count,
                "results": results,
            }
        )
