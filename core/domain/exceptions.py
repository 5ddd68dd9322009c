"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every concrete error belongs
to exactly one category (validation, not found, conflict, auth,
rate limit, internal), which decides how the surfaces render it.
"""
from datetime import datetime
from typing import Optional


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Malformed input, rejected before any store access."""

    pass


class NotFoundError(DomainException):
    """The requested license, account or credential does not exist."""

    pass


class ConflictError(DomainException):
    """A state precondition failed."""

    pass


class AuthError(DomainException):
    """Missing or invalid credentials, or insufficient privileges."""

    pass


class RateLimitError(DomainException):
    """A quota or time window was breached."""

    pass


class InternalError(DomainException):
    """Store I/O failure or unexpected condition."""

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message, code="INTERNAL_ERROR")


# Validation


class InvalidLicenseKeyFormatError(ValidationError):
    """Raised when a license key does not match XXXX-XXXX-XXXX-XXXX."""

    def __init__(self, message: str = "Invalid license key format. Expected XXXX-XXXX-XXXX-XXXX"):
        super().__init__(message, code="INVALID_LICENSE_KEY_FORMAT")


class InvalidUsernameError(ValidationError):
    """Raised when a display name breaks the format rule."""

    def __init__(
        self,
        message: str = (
            "Username must be 3-20 characters and contain only letters, numbers and underscores"
        ),
    ):
        super().__init__(message, code="INVALID_USERNAME")


class WeakPasswordError(ValidationError):
    """Raised when a password is too weak."""

    def __init__(
        self,
        message: str = (
            "Password must be at least 8 characters and contain "
            "uppercase, lowercase and a number"
        ),
    ):
        super().__init__(message, code="WEAK_PASSWORD")


class TooManyKeysError(ValidationError):
    """Raised when a batch holds more keys than allowed."""

    def __init__(self, limit: int = 100, message: Optional[str] = None):
        self.limit = limit
        super().__init__(
            message or f"Maximum {limit} keys per request",
            code="TOO_MANY_KEYS",
        )


class InvalidTierError(ValidationError):
    """Raised when a license tier code is unknown."""

    def __init__(self, tier: str):
        self.tier = tier
        super().__init__(f"Unknown license tier: {tier}", code="INVALID_TIER")


class InvalidAmountError(ValidationError):
    """Raised when a numeric option falls outside its range."""

    def __init__(self, message: str = "Amount out of range"):
        super().__init__(message, code="INVALID_AMOUNT")


class InvalidPageError(ValidationError):
    """Raised when a page number is beyond the last page."""

    def __init__(self, page: int, total_pages: int):
        self.page = page
        self.total_pages = total_pages
        super().__init__(
            f"Page {page} does not exist. Total pages: {total_pages}",
            code="INVALID_PAGE",
        )


# Not found


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class AccountNotFoundError(NotFoundError):
    """Raised when the caller has no registered account."""

    def __init__(self, message: str = "You are not registered. Use /signup first"):
        super().__init__(message, code="NOT_REGISTERED")


class NoLicenseError(NotFoundError):
    """Raised when an account's bound license is gone."""

    def __init__(self, message: str = "No license is bound to your account"):
        super().__init__(message, code="NO_LICENSE")


class ApiCredentialNotFoundError(NotFoundError):
    """Raised when an API credential does not exist or is already revoked."""

    def __init__(self, message: str = "API key not found or already revoked"):
        super().__init__(message, code="API_KEY_NOT_FOUND")


# Conflict


class LicenseAlreadyRedeemedError(ConflictError):
    """Raised when redeeming a license that is already redeemed."""

    def __init__(self, redeemed_by_caller: bool, redeemed_at: Optional[datetime] = None):
        self.redeemed_by_caller = redeemed_by_caller
        self.redeemed_at = redeemed_at
        owner = "you" if redeemed_by_caller else "another user"
        super().__init__(
            f"This license has already been redeemed by {owner}",
            code="LICENSE_ALREADY_REDEEMED",
        )


class LicenseAlreadyRevokedError(ConflictError):
    """Raised when revoking a license twice."""

    def __init__(
        self,
        revoked_by: Optional[str] = None,
        revoke_reason: Optional[str] = None,
        revoked_at: Optional[datetime] = None,
    ):
        self.revoked_by = revoked_by
        self.revoke_reason = revoke_reason
        self.revoked_at = revoked_at
        super().__init__("This license has already been revoked", code="LICENSE_ALREADY_REVOKED")


class LicenseRevokedError(ConflictError):
    """Raised when using a revoked license."""

    def __init__(self, revoke_reason: Optional[str] = None):
        self.revoke_reason = revoke_reason
        message = "This license has been revoked"
        if revoke_reason:
            message = f"{message}: {revoke_reason}"
        super().__init__(message, code="LICENSE_REVOKED")


class LicenseExpiredError(ConflictError):
    """Raised when a license has expired."""

    def __init__(self, expires_at: Optional[datetime] = None):
        self.expires_at = expires_at
        super().__init__("This license has expired", code="LICENSE_EXPIRED")


class LicenseNotActiveError(ConflictError):
    """Raised when a license has not been redeemed yet."""

    def __init__(self, message: str = "This license has not been activated yet"):
        super().__init__(message, code="LICENSE_NOT_ACTIVE")


class UsernameTakenError(ConflictError):
    """Raised when a display name is already in use."""

    def __init__(self, message: str = "This username is already taken"):
        super().__init__(message, code="USERNAME_TAKEN")


class AccountAlreadyRegisteredError(ConflictError):
    """Raised when the caller already has an account."""

    def __init__(self, message: str = "You already have an account"):
        super().__init__(message, code="ALREADY_REGISTERED")


class DuplicateLicenseKeyError(ConflictError):
    """Raised by the store when a generated key collides with an existing one."""

    def __init__(self, key: str):
        self.key = key
        super().__init__("License key already exists", code="DUPLICATE_LICENSE_KEY")


# Auth


class MissingAPIKeyError(AuthError):
    """Raised when a request carries no API key."""

    def __init__(self, message: str = "API key required"):
        super().__init__(message, code="API_KEY_REQUIRED")


class InvalidAPIKeyError(AuthError):
    """Raised when an API key is unknown or revoked."""

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message, code="INVALID_API_KEY")


class AdminRequiredError(AuthError):
    """Raised when a non-admin invokes an admin command."""

    def __init__(self, message: str = "You do not have permission to use this command"):
        super().__init__(message, code="ACCESS_DENIED")


class LicenseKeyMismatchError(AuthError):
    """Raised when the supplied key is not the one bound to the account."""

    def __init__(self, message: str = "This license key does not match your account"):
        super().__init__(message, code="KEY_MISMATCH")


# Rate limit


class RateLimitExceededError(RateLimitError):
    """Raised when a request window quota is exhausted."""

    def __init__(self, message: str = "Too many requests, please try again later"):
        super().__init__(message, code="RATE_LIMIT_EXCEEDED")


class DownloadCooldownError(RateLimitError):
    """Raised when a download is requested inside the cooldown window."""

    def __init__(self, remaining_minutes: int):
        self.remaining_minutes = remaining_minutes
        unit = "minute" if remaining_minutes == 1 else "minutes"
        super().__init__(
            f"Please wait {remaining_minutes} {unit} before downloading again",
            code="COOLDOWN_ACTIVE",
        )
