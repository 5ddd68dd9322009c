"""
Admin authorization.
"""
from typing import Iterable, Optional


def parse_admin_ids(raw: Optional[str]) -> frozenset:
    """Parse a comma separated allow-list, ignoring blanks."""
    return frozenset(part.strip() for part in (raw or "").split(",") if part.strip())


def is_admin(user_id: Optional[str], allowlist: Iterable[str]) -> bool:
    """True if ``user_id`` is on the admin allow-list."""
    return bool(user_id) and str(user_id) in allowlist
