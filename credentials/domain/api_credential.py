"""
ApiCredential domain entity.
"""
import hashlib
import secrets
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

TOKEN_PREFIX_LENGTH = 20
DEFAULT_QUOTA = 100
MIN_QUOTA = 10
MAX_QUOTA = 1000


def hash_token(token: str) -> str:
    """SHA-256 hex digest used for token lookup."""
    return hashlib.sha256(token.encode()).hexdigest()


@dataclass(frozen=True)
class ApiCredential:
    """
    API credential entity.

    Represents a token that grants access to the validation API.
    """

    token_hash: str
    token_prefix: str
    label: str
    issued_by: str
    issued_at: datetime
    quota_per_window: int = DEFAULT_QUOTA
    permissions: str = "read"
    is_active: bool = True
    last_used_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate credential entity."""
        if not self.token_hash or len(self.token_hash) != 64:
            raise ValueError("Invalid token hash")
        if not self.label:
            raise ValueError("Label is required")

    @classmethod
    def issue(
        cls,
        token: str,
        label: str,
        issued_by: str,
        issued_at: datetime,
        quota_per_window: int = DEFAULT_QUOTA,
    ) -> "ApiCredential":
        return cls(
            token_hash=hash_token(token),
            token_prefix=token[:TOKEN_PREFIX_LENGTH],
            label=label,
            issued_by=issued_by,
            issued_at=issued_at,
            quota_per_window=quota_per_window,
        )

    def matches(self, token: str) -> bool:
        return secrets.compare_digest(self.token_hash, hash_token(token))

    def revoke(self) -> "ApiCredential":
        if not self.is_active:
            raise ValueError("Credential is already revoked")
        return replace(self, is_active=False)
