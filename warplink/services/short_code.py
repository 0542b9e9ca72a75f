"""
Short Code Generation

Codes are drawn uniformly at random, character by character, from the 62
alphanumeric characters. At 7 characters that is 62**7 (about 3.5e12) codes.
Codes are independent of the URL: shortening the same URL twice yields two
unrelated codes.
"""

import secrets
import string

ALPHABET = string.ascii_letters + string.digits
DEFAULT_CODE_LENGTH = 7


def generate_short_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """
    Generate a random short code.

    Example:
        generate_short_code() -> "aZ3k9Qx"
    """
    return "".join(secrets.choice(ALPHABET) for _ in range(length))
