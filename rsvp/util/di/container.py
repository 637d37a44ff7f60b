"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from rsvp.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    The invite store is opened lazily on first resolution and closed by
    ``container.close()``. Settings come from the environment.

    Returns:
        Container with production providers
    """
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to a FastAPI app.

    The public and admin apps share one container, so they share one store.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
