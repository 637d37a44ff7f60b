"""Logfire setup for the RSVP service.

Services log and trace through ``logfire`` directly:

    with logfire.span("invite_service.accept_invite", invite_id=invite_id):
        logfire.info("Invite accepted", invite_id=invite_id)

This module only configures the SDK and attaches library instrumentation.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from rsvp import __version__
from rsvp.config import ObservabilitySettings, Settings


def _should_send(observability: ObservabilitySettings) -> bool:
    # An explicit flag wins; otherwise a token means cloud export is wanted
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Without ``OBSERVABILITY__LOGFIRE_TOKEN`` telemetry stays on the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings.observability)

    logfire.configure(
        service_name="rsvp",
        service_version=__version__,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    extra = {"path": request.url.path}
    if request.client:
        extra["client_host"] = request.client.host
    return {**attributes, **extra}


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request served by ``app``."""
    logfire.instrument_fastapi(app, request_attributes_mapper=_request_attributes)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace the store's SQL statements and transactions."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
