"""
AdminStatsQuery.
"""
from dataclasses import dataclass

STAT_CATEGORIES = ("overview", "licenses", "actions", "users")


@dataclass
class AdminStatsQuery:
    """Query for one statistics category."""

    category: str = "overview"
