"""
FastAPI integration for the content client.
"""

from typing import Any, Callable, Dict, Awaitable

from fastapi import FastAPI, Request
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response

from shared.errors import ContentLayerException
from shared.logging import clear_context, configure_logging, get_logger, request_id_var, set_request_id
from .domain.block import ContentBlock
from .domain.loader import ContentClient, SectionIds
from .domain.options import OptionsLike, RequestOptions, resolve_options


def request_options(defaults: RequestOptions, query: Dict[str, str]) -> Dict[str, Any]:
    """Derive per-request option overrides from the query string."""
    overrides: Dict[str, Any] = {}

    if defaults.edit_mode == "querystring":
        overrides["edit_mode"] = "edit" in query

    if defaults.lang_mode == "querystring" and query.get("lang"):
        overrides["lang"] = query["lang"]

    if overrides.get("edit_mode") is True:
        overrides["draft"] = True

    return overrides


class ContentOptionsMiddleware(BaseHTTPMiddleware):
    """Detect request-specific content options (edit mode, language)."""

    def __init__(self, app, defaults: OptionsLike = None):
        super().__init__(app)
        self.defaults = resolve_options(defaults)
        self.logger = get_logger("content.middleware")

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        set_request_id(request.headers.get("X-Request-ID"))
        try:
            overrides = request_options(self.defaults, dict(request.query_params))
            request.state.content_options = overrides
            if overrides:
                self.logger.debug("Request content options", path=request.url.path, **overrides)
            return await call_next(request)
        finally:
            clear_context()


def content_dependency(client: ContentClient, ids: SectionIds) -> Callable[[Request], Awaitable[ContentBlock]]:
    """Build a FastAPI dependency that loads sections for the current request.

    The loaded block is returned and also stored on ``request.state.content``
    so templates rendered later in the request can read it.
    """

    async def load_content(request: Request) -> ContentBlock:
        overrides = getattr(request.state, "content_options", None)
        content = await client.load(ids, overrides)
        request.state.content = content
        return content

    return load_content


ERROR_STATUS_CODES = {
    "CONFIGURATION_ERROR": 500,
    "REMOTE_ERROR": 502,
    "NETWORK_ERROR": 502,
    "PARSE_ERROR": 502,
}


def install_content(app: FastAPI, client: ContentClient) -> FastAPI:
    """Wire request option detection, content error responses and metrics into an app."""
    configure_logging("content", client.settings.log_level)
    logger = get_logger("content.middleware")

    app.add_middleware(ContentOptionsMiddleware, defaults=client.options)

    @app.get("/metrics")
    async def metrics_endpoint():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(client.metrics.registry),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.exception_handler(ContentLayerException)
    async def content_exception_handler(request: Request, exc: ContentLayerException):
        """Handle ContentLayerException."""
        logger.error(
            "Content load error",
            code=exc.code,
            message=exc.message,
            details=exc.details
        )
        return JSONResponse(
            status_code=ERROR_STATUS_CODES.get(exc.code, 500),
            content=exc.to_response(request_id_var.get()).model_dump()
        )

    return app
