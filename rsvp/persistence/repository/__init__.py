"""SQLite store implementations."""

from rsvp.persistence.repository.invite import SqliteInviteStore

__all__ = [
    "SqliteInviteStore",
]
