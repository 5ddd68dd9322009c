"""
RevokeLicenseCommand.
"""
from dataclasses import dataclass

DEFAULT_REVOKE_REASON = "No reason provided"


@dataclass
class RevokeLicenseCommand:
    """Permanently revoke a license."""

    license_key: str
    revoked_by: str
    revoked_by_name: str
    reason: str = DEFAULT_REVOKE_REASON
