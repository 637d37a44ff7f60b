"""In-memory store implementations for testing."""

from .invite import InMemoryInviteStore

__all__ = [
    "InMemoryInviteStore",
]
