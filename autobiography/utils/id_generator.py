"""
ID Generator Utility

Generates prefixed alphanumeric IDs for timeline events and shared stories.
Uses cryptographically secure random generation.
"""

import secrets
import string


def generate_id(prefix: str, length: int = 10) -> str:
    """
    Generate a prefixed alphanumeric ID.

    Args:
        prefix: The prefix for the ID (e.g., "EVT_", "SHR_")
        length: Length of the random part (default 10)

    Returns:
        A string like "EVT_7xK9mN2pQ4"

    Examples:
        >>> generate_id("EVT_")
        'EVT_7xK9mN2pQ4'
        >>> generate_id("SHR_", 16)
        'SHR_3fR8tY5wL1KmZq0a'
    """
    chars = string.ascii_letters + string.digits  # a-z, A-Z, 0-9 (62 chars)
    random_part = ''.join(secrets.choice(chars) for _ in range(length))
    return f"{prefix}{random_part}"


def generate_event_id() -> str:
    return generate_id("EVT_")


# Share ids are public, so they get a longer random part
def generate_share_id() -> str:
    return generate_id("SHR_", 16)
