"""
RegisterAccountCommand.
"""
from dataclasses import dataclass, field


@dataclass
class RegisterAccountCommand:
    """Create an account bound to an unused license."""

    account_id: str
    username: str
    password: str = field(repr=False)
    license_key: str
