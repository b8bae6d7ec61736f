"""API key authentication for admin endpoints."""

import secrets
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

ADMIN_PREFIX = "/api/admin"


class AdminKeyMiddleware(BaseHTTPMiddleware):
    """Middleware that requires an API key for admin endpoints.

    Pages and the public API are not affected.
    """

    def __init__(
        self,
        app: Callable[..., Awaitable[Response]],
        api_key: str,
        prefix: str = ADMIN_PREFIX,
    ) -> None:
        """Initialize middleware with API key.

        Args:
            app: ASGI application.
            api_key: Expected API key value.
            prefix: URL prefix of the guarded endpoints.
        """
        super().__init__(app)  # type: ignore[arg-type]
        self._api_key = api_key
        self._prefix = prefix.rstrip("/")

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Validate the API key for admin paths.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler.

        Returns:
            HTTP response, or 401 if authentication fails.
        """
        path = request.url.path
        if path != self._prefix and not path.startswith(self._prefix + "/"):
            return await call_next(request)

        if request.method == "OPTIONS":
            return await call_next(request)

        provided_key = request.headers.get("X-API-Key", "")

        if not provided_key:
            return JSONResponse(
                status_code=401,
                content={"error": "Missing X-API-Key header"},
            )

        if not secrets.compare_digest(provided_key, self._api_key):
            return JSONResponse(
                status_code=401,
                content={"error": "Invalid API key"},
            )

        return await call_next(request)
