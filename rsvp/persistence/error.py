"""Persistence layer errors."""


class PersistenceError(Exception):
    """Base persistence error."""

    pass


class StoreError(PersistenceError):
    """I/O or corruption failure in the invite store.

    The store performs no retry; callers decide whether to retry or fail.
    """

    pass


class StoreOpenError(StoreError):
    """The backing database could not be opened or locked."""

    pass


class CodecError(StoreError):
    """A stored payload could not be decoded (on-disk corruption)."""

    pass
