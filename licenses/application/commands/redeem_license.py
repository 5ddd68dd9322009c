"""
RedeemLicenseCommand.
"""
from dataclasses import dataclass


@dataclass
class RedeemLicenseCommand:
    """Bind a license to the calling chat identity."""

    license_key: str
    account_id: str
    account_name: str
