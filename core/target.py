"""Target URL extraction from the proxy path."""

import re
from urllib.parse import unquote_to_bytes, urlsplit

from core.exceptions import InvalidTarget

_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def resolve_target(path_suffix: str) -> str:
    """Turn the part of the path after ``/proxy/`` into an absolute URL.

    The suffix is normally percent-encoded, but some callers send the target
    already decoded, so the raw suffix is accepted when its decoded form is not
    an http(s) URL.
    """
    if not path_suffix:
        raise InvalidTarget("Missing proxy target URL")

    decoded = _percent_decode(path_suffix)
    if _HTTP_SCHEME.match(decoded):
        return _require_host(decoded)
    if _HTTP_SCHEME.match(path_suffix):
        return _require_host(path_suffix)
    raise InvalidTarget("Proxy target must be an absolute http(s) URL")


def _require_host(url: str) -> str:
    try:
        host = urlsplit(url).hostname
    except ValueError as e:
        raise InvalidTarget(f"Invalid proxy target URL: {e}") from e
    if not host:
        raise InvalidTarget("Proxy target URL has no host")
    return url


def _percent_decode(value: str) -> str:
    if _BAD_ESCAPE.search(value):
        raise InvalidTarget("Malformed percent-encoding in proxy target")
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidTarget("Proxy target is not valid UTF-8") from e
