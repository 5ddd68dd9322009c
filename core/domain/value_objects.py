"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum

from core.domain.exceptions import (
    InvalidLicenseKeyFormatError,
    InvalidUsernameError,
    WeakPasswordError,
)

LICENSE_KEY_PATTERN = re.compile(r"^[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
PASSWORD_MIN_LENGTH = 8


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


def sanitize_input(value: str) -> str:
    """Trim whitespace and drop angle brackets from free-text input."""
    if not isinstance(value, str):
        return value
    return value.strip().replace("<", "").replace(">", "")


def normalize_license_key(value: str) -> str:
    """Return the canonical (trimmed, upper-case) form of a license key."""
    return sanitize_input(value or "").upper()


def is_valid_license_key(value: str) -> bool:
    """Check a key against the license key grammar after normalization."""
    return bool(LICENSE_KEY_PATTERN.match(normalize_license_key(value)))


@dataclass(frozen=True)
class LicenseKeyCode(ValueObject):
    """License key in canonical upper-case form."""

    value: str

    def __post_init__(self):
        """Normalize and validate key format."""
        normalized = normalize_license_key(self.value)
        if not LICENSE_KEY_PATTERN.match(normalized):
            raise InvalidLicenseKeyFormatError()
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        """Return key as string."""
        return self.value


@dataclass(frozen=True)
class Username(ValueObject):
    """Display name chosen at registration."""

    value: str

    def __post_init__(self):
        """Validate username format."""
        cleaned = sanitize_input(self.value or "")
        if not USERNAME_PATTERN.match(cleaned):
            raise InvalidUsernameError()
        object.__setattr__(self, "value", cleaned)

    def __str__(self) -> str:
        """Return username as string."""
        return self.value


@dataclass(frozen=True, repr=False)
class Password(ValueObject):
    """Raw password that passed the strength rule. Never rendered."""

    value: str

    def __post_init__(self):
        """Validate password strength."""
        value = self.value or ""
        if (
            len(value) < PASSWORD_MIN_LENGTH
            or not re.search(r"[A-Z]", value)
            or not re.search(r"[a-z]", value)
            or not re.search(r"\d", value)
        ):
            raise WeakPasswordError()

    def __repr__(self) -> str:
        return "Password('********')"

    __str__ = __repr__


class LicenseStatus(Enum):
    """License status value object."""

    UNUSED = "unused"
    REDEEMED = "redeemed"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class ValidationOutcome(Enum):
    """Result of validating a license key."""

    NONEXISTENT = "nonexistent"
    NOT_ACTIVATED = "not_activated"
    REVOKED = "revoked"
    EXPIRED = "expired"
    VALID = "valid"

    def __str__(self) -> str:
        """Return outcome as string."""
        return self.value
