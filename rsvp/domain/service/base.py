"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services sit between the interface layer and the store.
    """

    pass
