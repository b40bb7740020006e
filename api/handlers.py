"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from core.config import Config
from core.exceptions import GatewayError
from core.headers import CORS_HEADERS, PREFLIGHT_HEADERS
from core.protocols import RequestLogger


def raw_request_path(request: Request) -> str:
    """Return the request path before percent-decoding."""
    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return request.url.path
    # Some servers leave the query string on raw_path
    return raw_path.split(b"?", 1)[0].decode("latin-1")


async def handle_request(request: Request, config: Config) -> Response:
    """Dispatch a request to preflight, proxy, or static handling."""
    decision = request.app.state.route_decider.decide(request.method, raw_request_path(request))

    if decision.route == "preflight":
        return preflight_response()

    if decision.route == "proxy":
        forwarder = request.app.state.forwarder
        return await forwarder.forward(request, decision.path_suffix, config)

    static_responder = request.app.state.static_responder
    return static_responder.respond(request.method, request.url.path)


def preflight_response() -> Response:
    """Answer a CORS preflight for any path."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


def gateway_error_response(exc: GatewayError, logger: RequestLogger) -> JSONResponse:
    """Render a proxy failure as ``{"success": false, "error": ...}`` with CORS headers."""
    logger.log_error("proxy", exc.status_code, exc.message)
    return JSONResponse(
        content={"success": False, "error": exc.message},
        status_code=exc.status_code,
        headers=CORS_HEADERS,
    )
