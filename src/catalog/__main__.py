"""Entry point for the catalog server."""

import asyncio
import contextlib
import sys

import structlog
import uvicorn

from catalog.app import create_app
from catalog.config import Settings
from catalog.logging import configure_logging
from catalog.site import ConfigurationError

logger = structlog.get_logger()


async def serve(settings: Settings) -> None:
    """Run uvicorn until it receives SIGTERM or SIGINT.

    uvicorn installs its own signal handlers and drains open connections
    for up to the configured shutdown timeout.

    Args:
        settings: Server configuration.
    """
    app = create_app(settings)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
        timeout_graceful_shutdown=int(settings.shutdown_timeout),
    )
    server = uvicorn.Server(config)

    logger.info(
        "server_listening",
        url=f"http://{settings.host}:{settings.port}",
    )
    await server.serve()


def main() -> None:
    """Entry point for python -m catalog."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_logs=settings.json_logs)

    try:
        with contextlib.suppress(KeyboardInterrupt):
            asyncio.run(serve(settings))
    except ConfigurationError as e:
        logger.error("configuration_error", error=str(e), value=e.value)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
