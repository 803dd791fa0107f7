"""Entry point for the agenda service."""

import asyncio
import signal
import sys
from typing import NoReturn

import uvicorn

from agenda_service.config import Settings, load_settings_with_toml
from agenda_service.utils.logging import get_logger, setup_logging


async def run_services(settings: Settings | None = None) -> None:
    """Run the HTTP server until a shutdown signal arrives."""
    from agenda_service import __version__
    from agenda_service.api.http_server import create_http_server
    from agenda_service.core.context import AppContext

    settings = settings or load_settings_with_toml()
    logger = get_logger(__name__)

    logger.info("starting_agenda_service", version=__version__, backend_url=settings.backend_url)

    context = AppContext(settings)
    await context.initialize()
    http_app = create_http_server(context, manage_context=False)

    shutdown_event = asyncio.Event()

    def handle_signal(sig: signal.Signals) -> None:
        logger.info("shutdown_signal_received", signal=sig.name)
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal, sig)

    http_config = uvicorn.Config(
        http_app,
        host=settings.http_host,
        port=settings.http_port,
        log_level="warning",
    )
    http_server = uvicorn.Server(http_config)

    async def serve_http() -> None:
        try:
            await http_server.serve()
        finally:
            shutdown_event.set()

    async def stop_on_shutdown() -> None:
        await shutdown_event.wait()
        http_server.should_exit = True

    try:
        async with asyncio.TaskGroup() as tg:
            tg.create_task(serve_http())
            tg.create_task(stop_on_shutdown())
    except* Exception as eg:
        for exc in eg.exceptions:
            logger.error("service_error", error=str(exc))
    finally:
        logger.info("shutting_down_services")
        await context.teardown()
        logger.info("agenda_service_stopped")


def main() -> NoReturn:
    """Main entry point."""
    settings = load_settings_with_toml()
    setup_logging(settings)
    try:
        asyncio.run(run_services(settings))
    except KeyboardInterrupt:
        pass
    sys.exit(0)


if __name__ == "__main__":
    main()
