"""
API credential commands.
"""
from dataclasses import dataclass, field

from credentials.domain.api_credential import DEFAULT_QUOTA


@dataclass
class IssueApiCredentialCommand:
    """Issue a new API token."""

    label: str
    issued_by: str
    issued_by_name: str
    quota_per_window: int = DEFAULT_QUOTA


@dataclass
class RevokeApiCredentialCommand:
    """Permanently revoke an API token."""

    token: str = field(repr=False)
    revoked_by: str
    revoked_by_name: str


@dataclass
class AuthenticateApiCredentialCommand:
    """Check a presented token and record its use."""

    token: str = field(repr=False)
