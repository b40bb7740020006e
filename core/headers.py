"""Header construction for proxied requests and responses."""

import random
from collections.abc import Iterable, Sequence

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, HEAD, POST, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}

PREFLIGHT_HEADERS = {**CORS_HEADERS, "Access-Control-Max-Age": "86400"}

# Connection-scoped headers that must not cross the gateway
HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)

# Set by the HTTP client for the outbound request
_CLIENT_MANAGED = frozenset({"host", "content-length"})


class HeaderBuilder:
    """Build outbound request headers and proxied response headers."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def pick_user_agent(self, user_agents: Sequence[str]) -> str:
        """Choose a User-Agent uniformly from the configured list."""
        return self._rng.choice(user_agents)

    def build_upstream_headers(
        self,
        headers: Iterable[tuple[str, str]],
        user_agent: str,
    ) -> list[tuple[str, str]]:
        """Copy inbound headers without cookies and with the given User-Agent."""
        upstream: list[tuple[str, str]] = []
        for key, value in headers:
            key_lower = key.lower()
            if key_lower in ("cookie", "user-agent"):
                continue
            if key_lower in HOP_BY_HOP or key_lower in _CLIENT_MANAGED:
                continue
            upstream.append((key, value))
        upstream.append(("User-Agent", user_agent))
        return upstream

    def build_response_headers(self, headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
        """Pass upstream headers through, replacing any CORS headers with ours."""
        cors_names = {name.lower() for name in CORS_HEADERS}
        response = [
            (key, value)
            for key, value in headers
            if key.lower() not in HOP_BY_HOP and key.lower() not in cors_names
        ]
        response.extend(CORS_HEADERS.items())
        return response
