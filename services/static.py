"""Static web application responder with SPA fallback."""

from fastapi import Response

from core.auth import password_hash
from core.config import Config
from core.exceptions import AssetNotFound
from core.protocols import AssetStore, RequestLogger

ENTRY_DOCUMENT = "/index.html"
SEARCH_ROUTE_PREFIX = "/s="
PASSWORD_PLACEHOLDER = 'window.__ENV__.PASSWORD = "{{PASSWORD}}";'


class StaticResponder:
    """Answer non-proxy requests from the bundled asset store."""

    def __init__(self, store: AssetStore, config: Config, logger: RequestLogger) -> None:
        self._store = store
        self._config = config
        self._logger = logger

    def respond(self, method: str, path: str) -> Response:
        if method.upper() not in ("GET", "HEAD"):
            return self._not_found(path)

        asset_path = map_request_to_asset(path)
        try:
            asset = self._store.get(asset_path)
        except AssetNotFound:
            return self._not_found(path)
        except Exception as e:
            self._logger.log_error("static", 404, f"{path}: {e}")
            return self._not_found(path)

        content = asset.content
        if "text/html" in asset.content_type:
            content = self._inject_password_hash(content)

        self._logger.log_static(path, 200)
        return Response(content=content, status_code=200, media_type=asset.content_type)

    def _inject_password_hash(self, content: bytes) -> bytes:
        """Expose the secret's hash to the front end, never the secret itself."""
        token = password_hash(self._config.secret) if self._config.secret else ""
        html = content.decode("utf-8", errors="replace")
        html = html.replace(PASSWORD_PLACEHOLDER, f'window.__ENV__.PASSWORD = "{token}";', 1)
        return html.encode("utf-8")

    def _not_found(self, path: str) -> Response:
        self._logger.log_static(path, 404)
        return Response(content="404 Not Found", status_code=404, media_type="text/plain")


def map_request_to_asset(path: str) -> str:
    """Map a request path to the asset it should be served from.

    Extensionless paths and ``/s=`` search routes belong to the client-side
    router and all resolve to the entry document.
    """
    if "." not in path or path.startswith(SEARCH_ROUTE_PREFIX):
        return ENTRY_DOCUMENT
    if path.endswith("/"):
        return path + "index.html"
    return path
