"""Authorize and forward /proxy/ requests to third-party origins."""

from collections.abc import Callable

from fastapi import Request
from fastapi.responses import StreamingResponse
from starlette.datastructures import QueryParams

from core.auth import is_authorized, now_millis
from core.config import Config
from core.exceptions import Unauthorized
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.target import resolve_target
from services.upstream import UpstreamClient
from ui.log_utils import write_proxy_log


class ProxyForwarder:
    """Forward an authorized request to the URL carried in its path."""

    def __init__(
        self,
        upstream: UpstreamClient,
        header_builder: HeaderBuilder,
        logger: RequestLogger,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        self._upstream = upstream
        self._headers = header_builder
        self._logger = logger
        self._clock = clock

    async def forward(
        self,
        request: Request,
        path_suffix: str,
        config: Config,
    ) -> StreamingResponse:
        """Relay ``request`` to the target URL and stream the answer back.

        Raises:
            InvalidTarget: The path holds no absolute http(s) URL.
            Unauthorized: The auth token is missing, wrong, or expired.
            UpstreamUnavailable: The target could not be reached.
        """
        target_url = resolve_target(path_suffix)

        if not is_authorized(_first_values(request.query_params), config, self._clock()):
            raise Unauthorized("Unauthorized")

        user_agent = self._headers.pick_user_agent(config.user_agents)
        upstream_headers = self._headers.build_upstream_headers(request.headers.items(), user_agent)
        body = await request.body()

        if config.debug:
            write_proxy_log(request.method, target_url, upstream_headers)

        response = await self._upstream.fetch(
            request.method,
            target_url,
            upstream_headers,
            body,
            cache_ttl=config.cache_ttl_seconds,
        )
        self._logger.log_proxy(request.method, target_url, response.status_code, user_agent)

        proxied = StreamingResponse(
            self._upstream.relay_body(response),
            status_code=response.status_code,
        )
        upstream_response_headers = [
            (key.decode("latin-1"), value.decode("latin-1")) for key, value in response.headers.raw
        ]
        for key, value in self._headers.build_response_headers(upstream_response_headers):
            proxied.headers.append(key, value)
        return proxied


def _first_values(query_params: QueryParams) -> dict[str, str]:
    """Collapse repeated query parameters to their first occurrence."""
    return {key: query_params.getlist(key)[0] for key in query_params.keys()}
