"""Request routing logic - preflight, proxy, or static asset."""

from dataclasses import dataclass

PROXY_PREFIX = "/proxy/"


@dataclass(frozen=True)
class RouteDecision:
    """Routing decision for a request."""

    route: str
    path_suffix: str = ""


class RouteDecider:
    """Decide which responder handles a request."""

    def __init__(self, proxy_prefix: str = PROXY_PREFIX):
        self.proxy_prefix = proxy_prefix

    def decide(self, method: str, raw_path: str) -> RouteDecision:
        """Return the route based on method and (still percent-encoded) path."""
        if method.upper() == "OPTIONS":
            return RouteDecision(route="preflight")
        if raw_path.startswith(self.proxy_prefix):
            return RouteDecision(route="proxy", path_suffix=raw_path[len(self.proxy_prefix):])
        return RouteDecision(route="static")
