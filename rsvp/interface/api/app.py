"""FastAPI applications.

Two apps share one DI container, and so one invite store: the public app
(guest-facing, rate limited) and the admin app (bulk management, served on
a separate port).
"""

from dishka import AsyncContainer
from fastapi import FastAPI

from rsvp import __version__
from rsvp.config import Settings
from rsvp.interface.api.errors import register_error_handlers
from rsvp.interface.api.ratelimit import RateLimitMiddleware
from rsvp.interface.api.routes import admin, health, invites
from rsvp.util.di.container import create_container, setup_di


def create_app(
    container: AsyncContainer | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create the public FastAPI application.

    Args:
        container: DI container to serve from; a production one is built if omitted
        settings: Settings for middleware configuration; loaded from env if omitted

    Returns:
        Configured app
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="RSVP API",
        description="Guest-facing API for viewing and accepting invites",
        version=__version__,
    )

    register_error_handlers(app_instance)

    if settings.rate_limit.enabled:
        app_instance.add_middleware(
            RateLimitMiddleware,
            rps=settings.rate_limit.rps,
            burst=settings.rate_limit.burst,
            idle_ttl=settings.rate_limit.idle_ttl,
            sweep_interval=settings.rate_limit.sweep_interval,
            trust_forwarded_for=settings.rate_limit.trust_forwarded_for,
        )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(invites.router)

    return app_instance


def create_admin_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create the admin FastAPI application.

    Args:
        container: DI container to serve from; a production one is built if omitted

    Returns:
        Configured app
    """
    app_instance = FastAPI(
        title="RSVP Admin API",
        description="Bulk read and replace of the invite set",
        version=__version__,
    )

    register_error_handlers(app_instance)
    setup_di(app_instance, container or create_container())

    app_instance.include_router(admin.router)

    return app_instance
