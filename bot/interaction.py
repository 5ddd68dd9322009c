"""
Interaction value passed in by the chat-platform connector.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Interaction:
    """One slash-command invocation."""

    command: str
    user_id: str
    username: str
    options: Dict[str, Any] = field(default_factory=dict)
    subcommand: Optional[str] = None

    def get(self, name: str, default: Any = None) -> Any:
        value = self.options.get(name)
        return default if value is None else value
