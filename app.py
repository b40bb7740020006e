"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.handlers import gateway_error_response, handle_request
from core.config import Config
from core.exceptions import GatewayError
from core.headers import HeaderBuilder
from core.protocols import AssetStore, RequestLogger
from core.router import RouteDecider
from services.assets import DirectoryAssetStore, load_manifest
from services.forwarder import ProxyForwarder
from services.static import StaticResponder
from services.upstream import UpstreamClient, create_http_client

ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: Config,
    logger: RequestLogger,
    *,
    asset_store: AssetStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    header_builder: HeaderBuilder | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if asset_store is None:
        manifest = load_manifest(config.static_manifest) if config.static_manifest else None
        asset_store = DirectoryAssetStore(config.static_dir, manifest)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http_client = create_http_client(config.upstream_timeout, transport=transport)
        app.state.route_decider = RouteDecider()
        app.state.forwarder = ProxyForwarder(
            upstream=UpstreamClient(http_client),
            header_builder=header_builder or HeaderBuilder(),
            logger=logger,
        )
        app.state.static_responder = StaticResponder(asset_store, config, logger)
        try:
            yield
        finally:
            await http_client.aclose()

    app = FastAPI(
        title="Media Edge Gateway",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.exception_handler(GatewayError)
    async def on_gateway_error(request: Request, exc: GatewayError):
        return gateway_error_response(exc, logger)

    @app.exception_handler(405)
    async def on_unrouted_method(request: Request, exc: StarletteHTTPException):
        # Verbs outside ROUTE_METHODS (TRACE, custom methods) share the dispatcher
        try:
            return await handle_request(request, config)
        except GatewayError as e:
            return gateway_error_response(e, logger)

    @app.api_route("/{path:path}", methods=ROUTE_METHODS)
    async def dispatch(request: Request):
        return await handle_request(request, config)

    return app
