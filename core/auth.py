"""Shared-secret proxy authorization.

Clients never send the secret itself. They send its SHA-256 hex digest in the
``auth`` query parameter, optionally with ``t``, the client clock in
milliseconds since the epoch. A ``t`` older than ten minutes is rejected.

A request without ``t`` is accepted with no expiry at all. Bundled front ends
rely on this, so the freshness window only applies when the client opts in.
"""

import hashlib
import hmac
import re
import time
from collections.abc import Mapping
from functools import lru_cache

from core.config import Config

FRESHNESS_WINDOW_MS = 10 * 60 * 1000

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


@lru_cache(maxsize=8)
def password_hash(secret: str) -> str:
    """Return the lowercase hex SHA-256 digest of the shared secret."""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def now_millis() -> int:
    return time.time_ns() // 1_000_000


def is_authorized(query: Mapping[str, str], config: Config, now: int) -> bool:
    """Check the ``auth``/``t`` query parameters against the configured secret.

    Args:
        query: Request query parameters.
        config: Gateway configuration holding the shared secret.
        now: Current time in milliseconds since the epoch.

    Returns:
        False when no secret is configured, when the hash does not match, or
        when a supplied timestamp is older than the freshness window.
    """
    if not config.secret:
        return False

    supplied = query.get("auth")
    if supplied is None:
        return False
    if not hmac.compare_digest(supplied.encode("utf-8"), password_hash(config.secret).encode("ascii")):
        return False

    timestamp = query.get("t")
    if not timestamp:
        return True
    issued = _parse_timestamp(timestamp)
    if issued is None:
        return False
    return now - issued <= FRESHNESS_WINDOW_MS


def _parse_timestamp(value: str) -> int | None:
    """Parse the leading integer of ``value`` ("1700000000000abc" -> 1700000000000)."""
    match = _LEADING_INT.match(value)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Longer than the interpreter allows for int(); no real clock value
        return None
