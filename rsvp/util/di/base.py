"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with swappable production and test implementations
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for every provider in ``PROVIDERS``.

    A provider class that declares ``__mock_component__`` is an abstract
    component: its subclasses are the implementations, told apart by
    ``__is_mock__``. Providers without subclasses are used directly.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
