"""
License key and API token generation.

Keys are four groups of four characters from [0-9A-Z] joined by '-'.
Every character comes from the `secrets` CSPRNG.
"""

import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUPS = 4
KEY_GROUP_LENGTH = 4
API_TOKEN_PREFIX = "sk_"


def generate_license_key() -> str:
    """
    Generate a license key in format: XXXX-XXXX-XXXX-XXXX.

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUPS)
    ]
    return "-".join(parts)


def generate_api_token() -> str:
    """
    Generate an opaque API token.

    Two independent license-key-strength blocks with hyphens removed,
    behind a fixed marker: ``sk_`` + 32 characters.
    """
    blocks = (generate_license_key().replace("-", "") for _ in range(2))
    return API_TOKEN_PREFIX + "".join(blocks)
