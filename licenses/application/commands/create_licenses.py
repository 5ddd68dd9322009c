"""
CreateLicensesCommand.

Command to create a batch of unused licenses, either from a named tier
(`generate_keys`) or from a number of days (`create_license`).
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateLicensesCommand:
    """Create ``amount`` licenses in one all-or-nothing batch."""

    amount: int
    actor_id: str
    actor_name: str
    tier_code: Optional[str] = None
    expiry_days: Optional[int] = None
    max_amount: int = 100
