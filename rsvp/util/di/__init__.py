"""Dependency injection module.

``PROVIDERS`` lists one class per concern. Concrete providers are
instantiated as they are; a mockable component contributes its production
or mock subclass, chosen by ``get_provider``.
"""

from typing import Type

from rsvp.util.di.base import Component, ProviderBase
from rsvp.util.di.core import ProdConfigProvider
from rsvp.util.di.domain import ProdDomainProvider
from rsvp.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    # Mockable
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a ``PROVIDERS`` entry to the class to instantiate.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        ``base`` itself for concrete providers, else its matching subclass

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = {
        getattr(impl, "__is_mock__", False): impl for impl in base.__subclasses__()
    }
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        kind = "mock" if use_mock else "production"
        name = base.__mock_component__ or base.__name__
        raise ValueError(f"No {kind} implementation for {name}") from None


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
