#!/usr/bin/env python3
"""Start the public and admin APIs over one shared invite store."""

import asyncio
import contextlib
import signal
import sys

import logfire
import uvicorn

from rsvp.config import Settings
from rsvp.domain.repository import InviteStore
from rsvp.interface.api.app import create_admin_app, create_app
from rsvp.persistence.error import StoreOpenError
from rsvp.persistence.seed import SeedError, load_seed_file
from rsvp.util.di.container import create_container
from rsvp.util.error import ConfigurationError
from rsvp.util.logging import setup_logging
from rsvp.util.observability import configure_logfire, instrument_fastapi


class ManagedServer(uvicorn.Server):
    """uvicorn server whose shutdown is driven by this process's signal handlers."""

    @contextlib.contextmanager
    def capture_signals(self):
        yield

    def install_signal_handlers(self) -> None:
        pass


async def serve(settings: Settings) -> None:
    """Open the store, seed it, and serve both apps until signalled."""
    if settings.port == settings.admin_port:
        raise ConfigurationError("port and admin_port must differ")

    container = create_container()
    try:
        # Resolving the store opens and locks the database
        store = await container.get(InviteStore)
        await load_seed_file(settings.seed_file, store)

        public_app = create_app(container, settings)
        admin_app = create_admin_app(container)
        instrument_fastapi(public_app)
        instrument_fastapi(admin_app)

        servers = [
            ManagedServer(
                uvicorn.Config(
                    public_app, host=settings.host, port=settings.port, log_level="info"
                )
            ),
            ManagedServer(
                uvicorn.Config(
                    admin_app,
                    host=settings.host,
                    port=settings.admin_port,
                    log_level="info",
                )
            ),
        ]

        def _shutdown(sig: signal.Signals) -> None:
            logfire.info("Shutting down servers", signal=sig.name)
            for server in servers:
                server.should_exit = True

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _shutdown, sig)

        logfire.info(
            "Starting servers", port=settings.port, admin_port=settings.admin_port
        )
        await asyncio.gather(*(server.serve() for server in servers))
    finally:
        # Closes the store exactly once
        await container.close()


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        asyncio.run(serve(settings))
        return 0

    except (StoreOpenError, SeedError, ConfigurationError) as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
