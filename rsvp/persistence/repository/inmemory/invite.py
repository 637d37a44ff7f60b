"""In-memory invite store for testing."""

import asyncio
from collections.abc import Callable, Mapping
from datetime import datetime

from rsvp.domain.model.invite import InviteRecord, utc_now
from rsvp.domain.repository import InviteStore, check_guest_bounds
from rsvp.persistence.error import StoreError


class InMemoryInviteStore(InviteStore):
    """In-memory implementation of InviteStore for testing.

    A single lock serializes every operation. Records are copied on the way
    in and out, so callers never share list fields with the stored state.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._invites: dict[str, InviteRecord] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._closed = False

    async def get_invite(self, invite_id: str) -> InviteRecord | None:
        """Look up an invite and record the view."""
        async with self._guard():
            record = self._invites.get(invite_id)
            if record is None:
                return None
            record = record.viewed(self._clock())
            self._invites[invite_id] = record
            return _detached(record)

    async def update_invite(
        self, invite_id: str, accepted: bool, additional: list[str]
    ) -> InviteRecord | None:
        """Accept an invite."""
        async with self._guard():
            record = self._invites.get(invite_id)
            if record is None:
                return None
            record = record.accept(accepted, additional, self._clock())
            self._invites[invite_id] = record
            return _detached(record)

    async def seed(self, invites: Mapping[str, InviteRecord]) -> list[str]:
        """Insert invites whose ids are not already present."""
        async with self._guard():
            inserted = []
            for invite_id, record in invites.items():
                if invite_id in self._invites:
                    continue
                self._invites[invite_id] = _detached(record)
                inserted.append(invite_id)
            return inserted

    async def get_all_invites(self) -> dict[str, InviteRecord]:
        """Snapshot every invite."""
        async with self._guard():
            return {
                invite_id: _detached(record)
                for invite_id, record in self._invites.items()
            }

    async def replace_all_invites(self, invites: Mapping[str, InviteRecord]) -> None:
        """Discard every invite and install exactly ``invites``."""
        async with self._guard():
            check_guest_bounds(invites)
            self._invites = {
                invite_id: _detached(record) for invite_id, record in invites.items()
            }

    async def close(self) -> None:
        """Mark the store closed."""
        self._closed = True

    def _guard(self) -> asyncio.Lock:
        if self._closed:
            raise StoreError("store is closed")
        return self._lock


def _detached(record: InviteRecord) -> InviteRecord:
    return record.model_copy(deep=True)
