"""
API credential DTOs.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from credentials.domain.api_credential import ApiCredential


@dataclass
class ApiCredentialDTO:
    """Listing view; carries the token prefix only."""

    token_prefix: str
    label: str
    issued_by: str
    issued_at: datetime
    is_active: bool
    quota_per_window: int
    last_used_at: Optional[datetime]

    @classmethod
    def from_entity(cls, credential: ApiCredential) -> "ApiCredentialDTO":
        return cls(
            token_prefix=credential.token_prefix,
            label=credential.label,
            issued_by=credential.issued_by,
            issued_at=credential.issued_at,
            is_active=credential.is_active,
            quota_per_window=credential.quota_per_window,
            last_used_at=credential.last_used_at,
        )


@dataclass
class IssuedApiCredentialDTO:
    """Returned once at issue; the only place the raw token appears."""

    token: str
    credential: ApiCredentialDTO
