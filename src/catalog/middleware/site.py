"""Middleware that answers page requests through the resolution pipeline."""
from collections.abc import Awaitable, Callable

import structlog
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import (
    FileResponse,
    PlainTextResponse,
    RedirectResponse,
    Response,
)

from catalog.site import (
    Diagnostic,
    PageRequest,
    Passthrough,
    Redirect,
    ResolutionPipeline,
    ServeFile,
)

logger = structlog.get_logger()

PAGE_METHODS = frozenset({"GET", "HEAD"})


class SitePageMiddleware(BaseHTTPMiddleware):
    """Resolve every non-API request to a redirect, a file, or a miss.

    API requests go on to the routers unchanged. Page paths only accept
    GET and HEAD.
    """

    def __init__(
        self,
        app: Callable[..., Awaitable[Response]],
        pipeline: ResolutionPipeline,
    ) -> None:
        """Initialize middleware with a resolution pipeline.

        Args:
            app: ASGI application.
            pipeline: Pipeline built from the site layout at startup.
        """
        super().__init__(app)  # type: ignore[arg-type]
        self._pipeline = pipeline

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Resolve the request path and build the matching response.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler.

        Returns:
            Redirect, file, diagnostic or 404 response, or the API response
            for passthrough paths.
        """
        # scope["path"] is already percent-decoded; re-parsing the URL would
        # cut it at a decoded "?" or "#".
        page = PageRequest(path=request.scope["path"], query=request.url.query)
        outcome = await run_in_threadpool(self._pipeline.resolve, page)

        if isinstance(outcome, Passthrough):
            return await call_next(request)

        if isinstance(outcome, Redirect):
            logger.debug("page_redirect", path=page.path, target=outcome.target)
            return RedirectResponse(outcome.target, status_code=outcome.status_code)

        if request.method not in PAGE_METHODS:
            return PlainTextResponse(
                "Method not allowed",
                status_code=405,
                headers={"Allow": "GET, HEAD"},
            )

        if isinstance(outcome, ServeFile):
            logger.debug("page_served", path=page.path, file=str(outcome.path))
            return FileResponse(outcome.path)

        if isinstance(outcome, Diagnostic):
            return PlainTextResponse(outcome.text, status_code=200)

        logger.debug("page_not_found", path=page.path)
        return PlainTextResponse(outcome.text, status_code=404)
