"""
ListLicensesHandler.

Pages through the license store for the admin list command.
"""
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.pagination import Page, PageRequest
from core.domain.value_objects import LicenseStatus
from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.ports.license_repository import LicenseRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    @staticmethod
    def _parse_status(value: Optional[str]) -> Optional[LicenseStatus]:
        if not value or value == "all":
            return None
        try:
            return LicenseStatus(value.lower())
        except ValueError as e:
            raise ValidationError(f"Unknown license status: {value}", code="INVALID_STATUS") from e

    def handle(self, query: ListLicensesQuery) -> Page[LicenseDTO]:
        """
        Raises:
            InvalidPageError: If the page is beyond the last one
        """
        status = self._parse_status(query.status)
        total = self.license_repository.count(status)
        request = PageRequest(page=query.page, page_size=query.page_size, total=total)
        licenses = self.license_repository.list(
            status=status, offset=request.offset, limit=request.page_size
        )
        return Page(
            items=[LicenseDTO.from_entity(license) for license in licenses],
            page=request.page,
            total_pages=request.total_pages,
            total=total,
        )
