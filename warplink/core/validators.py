"""
Input Validators

Long URLs are parsed exactly once, before any code generation or store access.
Parsing goes through pydantic's AnyUrl, which follows the WHATWG URL rules:
relative references, empty hosts and bad ports are rejected at parse time.
"""

from pydantic import AnyUrl, TypeAdapter, ValidationError

from warplink.core.exceptions import InvalidURLError

ALLOWED_SCHEMES = frozenset({"http", "https"})
DEFAULT_MAX_URL_LENGTH = 2048

_url_adapter = TypeAdapter(AnyUrl)


def _parse_failure_reason(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    return str(first.get("ctx", {}).get("error") or first["msg"])


def validate_long_url(url: str, max_length: int = DEFAULT_MAX_URL_LENGTH) -> AnyUrl:
    """
    Validate a long URL and return its parsed form.

    Args:
        url: Raw URL as submitted by the client
        max_length: Longest accepted URL

    Returns:
        The parsed URL

    Raises:
        InvalidURLError: If the URL is too long, unparsable, or not http(s)
    """
    if len(url) > max_length:
        raise InvalidURLError(url, reason=f"Invalid url (longer than {max_length} characters)")

    try:
        parsed = _url_adapter.validate_python(url)
    except ValidationError as e:
        raise InvalidURLError(url, reason=f"Invalid url ({_parse_failure_reason(e)})") from e

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise InvalidURLError(
            url,
            reason=f"Invalid scheme '{parsed.scheme}' (http or https required)"
        )

    return parsed
