"""Unit tests for InMemoryInviteStore.

The in-memory store stands in for the SQLite store in service and API tests,
so it must follow the same contract.
"""

import asyncio

import pytest

from rsvp.domain.error import ValidationError
from rsvp.persistence.error import StoreError
from rsvp.persistence.repository.inmemory import InMemoryInviteStore
from tests.conftest import make_invite


class TestInMemoryInviteStore:
    """Contract tests for the in-memory store."""

    @pytest.mark.asyncio
    async def test_get_records_view(self, clock):
        # Arrange
        store = InMemoryInviteStore(clock=clock)
        await store.seed({"id1": make_invite()})

        # Act
        record = await store.get_invite("id1")

        # Assert
        assert record is not None
        assert record.viewed_at == [clock.now]
        stored = (await store.get_all_invites())["id1"]
        assert stored.viewed_at == [clock.now]

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        store = InMemoryInviteStore()

        assert await store.get_invite("missing") is None

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self):
        store = InMemoryInviteStore()

        assert await store.update_invite("missing", True, []) is None

    @pytest.mark.asyncio
    async def test_rejected_update_leaves_record(self):
        """Validation failures change nothing."""
        # Arrange
        store = InMemoryInviteStore()
        await store.seed({"id1": make_invite(additional_count=1)})

        # Act / Assert
        with pytest.raises(ValidationError):
            await store.update_invite("id1", True, ["Анна", "Пётр"])

        assert (await store.get_all_invites())["id1"] == make_invite(additional_count=1)

    @pytest.mark.asyncio
    async def test_concurrent_gets_record_every_view(self, clock):
        """Concurrent reads under a frozen clock give distinct timestamps."""
        # Arrange
        store = InMemoryInviteStore(clock=clock)
        await store.seed({"id1": make_invite()})

        # Act
        await asyncio.gather(*(store.get_invite("id1") for _ in range(20)))

        # Assert
        viewed_at = (await store.get_all_invites())["id1"].viewed_at
        assert len(viewed_at) == 20
        assert len(set(viewed_at)) == 20
        assert viewed_at == sorted(viewed_at)

    @pytest.mark.asyncio
    async def test_replace_is_exact(self):
        # Arrange
        store = InMemoryInviteStore()
        await store.seed({"old": make_invite()})
        replacement = {"new": make_invite(people=["Анна"])}

        # Act
        await store.replace_all_invites(replacement)

        # Assert
        assert await store.get_all_invites() == replacement

    @pytest.mark.asyncio
    async def test_replace_rejects_guest_overflow(self):
        """A batch with an over-bound record is rejected whole."""
        # Arrange
        store = InMemoryInviteStore()
        await store.seed({"old": make_invite()})
        bad = make_invite(additional_count=0, additional=["Пётр"])

        # Act / Assert
        with pytest.raises(ValidationError) as exc_info:
            await store.replace_all_invites({"ok": make_invite(), "bad": bad})

        assert "invite bad" in str(exc_info.value)
        assert set(await store.get_all_invites()) == {"old"}

    @pytest.mark.asyncio
    async def test_snapshot_is_detached(self):
        """Mutating a returned snapshot does not touch the store."""
        store = InMemoryInviteStore()
        await store.seed({"id1": make_invite()})

        snapshot = await store.get_all_invites()
        snapshot.clear()

        assert set(await store.get_all_invites()) == {"id1"}

    @pytest.mark.asyncio
    async def test_returned_records_do_not_share_lists(self):
        """Appending to a returned record's lists leaves the stored record alone."""
        # Arrange
        store = InMemoryInviteStore()
        seeded = make_invite(additional_count=1)
        await store.seed({"id1": seeded})

        # Act
        (await store.get_all_invites())["id1"].additional.append("Пётр")
        (await store.get_invite("id1")).viewed_at.clear()
        seeded.people.append("Анна")

        # Assert
        stored = (await store.get_all_invites())["id1"]
        assert stored.additional == []
        assert len(stored.viewed_at) == 1
        assert stored.people == ["Иван Петров"]

    @pytest.mark.asyncio
    async def test_operations_after_close_fail(self):
        # Arrange
        store = InMemoryInviteStore()
        await store.seed({"id1": make_invite()})

        # Act
        await store.close()
        await store.close()

        # Assert
        with pytest.raises(StoreError):
            await store.get_invite("id1")
        with pytest.raises(StoreError):
            await store.get_all_invites()
