"""HTTP fetch layer for proxied requests."""

from collections.abc import AsyncIterator
from http.cookiejar import CookieJar, DefaultCookiePolicy

import httpx

from core.exceptions import InvalidTarget, UpstreamUnavailable


def create_http_client(
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared client used for every proxied request.

    Redirects are followed and no cookies are stored, so one caller's upstream
    session never reaches another caller's request.
    """
    no_cookies = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        cookies=no_cookies,
        transport=transport,
    )


class UpstreamClient:
    """Send proxied requests to arbitrary origins with streaming support."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(
        self,
        method: str,
        url: str,
        headers: list[tuple[str, str]],
        body: bytes | None,
        *,
        cache_ttl: int,
    ) -> httpx.Response:
        """Send the request and return the response with its body unread.

        The caller owns the response and must close it, normally by exhausting
        ``relay_body``.
        """
        # Starlette decodes header bytes as latin-1; encode back to the same bytes
        raw_headers = [(key.encode("latin-1"), value.encode("latin-1")) for key, value in headers]
        try:
            req = self._client.build_request(
                method,
                url,
                headers=raw_headers,
                content=body or None,
                extensions={"cache_ttl": cache_ttl},
            )
        except (httpx.InvalidURL, ValueError) as e:
            raise InvalidTarget(f"Invalid proxy target URL: {e}") from e

        try:
            return await self._client.send(req, stream=True)
        except httpx.RequestError as e:
            raise UpstreamUnavailable(f"Proxy request failed: {e}", target=url) from e
        except ValueError as e:
            # Raised by httpx for URLs it accepted at build time, e.g. an empty host
            raise InvalidTarget(f"Invalid proxy target URL: {e}") from e

    async def relay_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Yield the raw upstream body, closing the response when done or abandoned."""
        try:
            # Transports may hand back responses whose body is already in memory
            if response.is_stream_consumed:
                yield response.content
            else:
                async for chunk in response.aiter_raw():
                    yield chunk
        finally:
            await response.aclose()
