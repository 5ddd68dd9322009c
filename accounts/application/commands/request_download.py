"""
RequestDownloadCommand.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RequestDownloadCommand:
    """Ask for the download link with the key bound to the account."""

    account_id: str
    license_key: str
    ip_address: Optional[str] = None
