"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Business rule violation caused by caller input.

    Never retried; surfaced to API clients as a 400 with the rule text.
    """

    pass
