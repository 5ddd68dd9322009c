"""
Replies rendered by the connector.

A reply is a titled message with optional fields. Long field lists
spill into follow-up replies so a single message never exceeds the
platform limits.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

SUCCESS = "success"
ERROR = "error"
INFO = "info"
WARNING = "warning"
ADMIN = "admin"

COLORS = {
    SUCCESS: 0x00FF00,
    ERROR: 0xFF0000,
    INFO: 0x3498DB,
    WARNING: 0xFFA500,
    ADMIN: 0x9B59B6,
}

TITLE_PREFIXES = {
    SUCCESS: "✅",
    ERROR: "❌",
    INFO: "ℹ️",
    WARNING: "⚠️",
    ADMIN: "🔐",
}

MAX_FIELDS = 25
MAX_FIELD_VALUE = 1024
KEYS_PER_FIELD = 10

STATUS_LABELS = {
    "unused": "🆕 Unused",
    "redeemed": "✅ Redeemed",
    "revoked": "🚫 Revoked",
}

UNEXPECTED_ERROR = (
    "An unexpected error occurred. Please try again later or contact an administrator."
)


@dataclass(frozen=True)
class ReplyField:
    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass
class Reply:
    """A rendered command result."""

    kind: str
    title: str
    description: str = ""
    fields: List[ReplyField] = field(default_factory=list)
    followups: List["Reply"] = field(default_factory=list)
    ephemeral: bool = True

    @property
    def color(self) -> int:
        return COLORS[self.kind]

    @property
    def is_error(self) -> bool:
        return self.kind == ERROR

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "kind": self.kind,
            "color": self.color,
            "title": f"{TITLE_PREFIXES[self.kind]} {self.title}",
            "description": self.description,
            "fields": [reply_field.to_dict() for reply_field in self.fields],
            "ephemeral": self.ephemeral,
        }
        if self.kind == ADMIN:
            data["footer"] = "Admin Command"
        if self.followups:
            data["followups"] = [followup.to_dict() for followup in self.followups]
        return data


def build_reply(
    kind: str, title: str, description: str = "", fields: Sequence[ReplyField] = ()
) -> Reply:
    """
    Build a reply, moving fields past the 25th into follow-ups.

    Args:
        kind: One of success, error, info, warning, admin
        title: Reply title without the emoji prefix
        description: Body text
        fields: Any number of fields

    Returns:
        Reply whose ``followups`` carry the overflow
    """
    groups = [list(fields[i : i + MAX_FIELDS]) for i in range(0, len(fields), MAX_FIELDS)]
    reply = Reply(
        kind=kind, title=title, description=description, fields=groups[0] if groups else []
    )
    for group in groups[1:]:
        reply.followups.append(Reply(kind=kind, title=f"{title} (continued)", fields=group))
    return reply


def success_reply(title: str, description: str = "", fields: Sequence[ReplyField] = ()) -> Reply:
    return build_reply(SUCCESS, title, description, fields)


def error_reply(title: str, description: str = "", fields: Sequence[ReplyField] = ()) -> Reply:
    return build_reply(ERROR, title, description, fields)


def info_reply(title: str, description: str = "", fields: Sequence[ReplyField] = ()) -> Reply:
    return build_reply(INFO, title, description, fields)


def warning_reply(title: str, description: str = "", fields: Sequence[ReplyField] = ()) -> Reply:
    return build_reply(WARNING, title, description, fields)


def admin_reply(title: str, description: str = "", fields: Sequence[ReplyField] = ()) -> Reply:
    return build_reply(ADMIN, title, description, fields)


def key_fields(keys: Sequence[str], per_field: int = KEYS_PER_FIELD) -> List[ReplyField]:
    """Group license keys into code-block fields of ``per_field`` keys."""
    chunks = [keys[i : i + per_field] for i in range(0, len(keys), per_field)]
    return [
        ReplyField(
            name=f"🔑 Keys {index * per_field + 1}-{index * per_field + len(chunk)}",
            value="```\n" + "\n".join(chunk) + "\n```",
        )
        for index, chunk in enumerate(chunks)
    ]


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "N/A"
    return value.strftime("%b %d, %Y %H:%M UTC")


def format_expiry(value: Optional[datetime]) -> str:
    return format_date(value) if value else "Never"


def format_status(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def mention(user_id: Optional[str]) -> str:
    return f"<@{user_id}>" if user_id else "None"


def truncate(text: Optional[str], max_length: int = MAX_FIELD_VALUE) -> str:
    if not text:
        return "N/A"
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def lines(*parts: Optional[str]) -> str:
    """Join non-empty lines."""
    return "\n".join(part for part in parts if part)


def bullet_list(items: Iterable[str]) -> str:
    return truncate("\n".join(f"• {item}" for item in items))
