"""
Shared test constants and helpers.
"""

from datetime import datetime, timedelta, timezone

ADMIN_ID = "100000000000000001"
USER_ID = "200000000000000002"
OTHER_USER_ID = "300000000000000003"

FIXED_NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

KEY_UNUSED = "AAAA-BBBB-CCCC-0001"
KEY_SECOND = "AAAA-BBBB-CCCC-0002"
KEY_THIRD = "AAAA-BBBB-CCCC-0003"

PASSWORD = "Secret123"


class FakeClock:
    """Settable clock for handlers."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)
