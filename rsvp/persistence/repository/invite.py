"""SQLite implementation of the invite store."""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime
from typing import TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from rsvp.domain.model.invite import InviteRecord, utc_now
from rsvp.domain.repository import InviteStore, check_guest_bounds
from rsvp.persistence.codec import decode, encode
from rsvp.persistence.database import BEGIN_MODE
from rsvp.persistence.error import StoreError, StoreOpenError
from rsvp.persistence.tables import invites_table, metadata

T = TypeVar("T")

# Ids per existence query when seeding
SEED_LOOKUP_CHUNK = 500


class SqliteInviteStore(InviteStore):
    """Invite store backed by one SQLite file.

    Write paths (including the view-tracking get) run in ``BEGIN IMMEDIATE``
    transactions; the bulk listing runs in a deferred read transaction.
    Transactions are shielded from caller cancellation: once started they
    commit or fail on their own.
    """

    def __init__(
        self, engine: AsyncEngine, clock: Callable[[], datetime] = utc_now
    ) -> None:
        """Initialize store over an already opened engine.

        Use ``open`` rather than calling this directly.

        Args:
            engine: Engine from ``rsvp.persistence.database.create_engine``
            clock: Source of view and acceptance timestamps
        """
        self._engine: AsyncEngine | None = engine
        self._clock = clock

    @classmethod
    async def open(
        cls, engine: AsyncEngine, clock: Callable[[], datetime] = utc_now
    ) -> "SqliteInviteStore":
        """Lock the database file and ensure the invites partition exists.

        Idempotent across restarts. The engine is disposed if opening fails.

        Args:
            engine: Engine from ``rsvp.persistence.database.create_engine``
            clock: Source of view and acceptance timestamps

        Returns:
            Ready store holding the file's exclusive lock

        Raises:
            StoreOpenError: If the path is unusable or the lock is held
                elsewhere past the configured timeout
        """
        try:
            async with engine.connect() as conn:
                conn = await conn.execution_options(**{BEGIN_MODE: "EXCLUSIVE"})
                async with conn.begin():
                    await conn.run_sync(metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            await engine.dispose()
            raise StoreOpenError(f"opening invite database {engine.url.database}: {e}") from e

        return cls(engine, clock)

    async def get_invite(self, invite_id: str) -> InviteRecord | None:
        """Look up an invite and persist one more view before returning it."""

        async def _get(conn: AsyncConnection) -> InviteRecord | None:
            record = await self._load(conn, invite_id)
            if record is None:
                return None

            record = record.viewed(self._clock())
            await self._put(conn, invite_id, record)
            return record

        return await self._transaction(_get)

    async def update_invite(
        self, invite_id: str, accepted: bool, additional: list[str]
    ) -> InviteRecord | None:
        """Accept an invite within one write transaction.

        Raises:
            ValidationError: If accepted is False or too many guests are given
        """

        async def _update(conn: AsyncConnection) -> InviteRecord | None:
            record = await self._load(conn, invite_id)
            if record is None:
                return None

            record = record.accept(accepted, additional, self._clock())
            await self._put(conn, invite_id, record)
            return record

        return await self._transaction(_update)

    async def seed(self, invites: Mapping[str, InviteRecord]) -> list[str]:
        """Insert invites whose ids are not already present."""
        if not invites:
            return []

        async def _seed(conn: AsyncConnection) -> list[str]:
            ids = list(invites)
            existing: set[str] = set()
            # Bounded IN lists stay under SQLite's bound-parameter limit
            for start in range(0, len(ids), SEED_LOOKUP_CHUNK):
                result = await conn.execute(
                    select(invites_table.c.id).where(
                        invites_table.c.id.in_(ids[start : start + SEED_LOOKUP_CHUNK])
                    )
                )
                existing.update(result.scalars())
            rows = [
                {"id": invite_id, "payload": encode(record)}
                for invite_id, record in invites.items()
                if invite_id not in existing
            ]
            if rows:
                await conn.execute(insert(invites_table), rows)
            return [row["id"] for row in rows]

        return await self._transaction(_seed)

    async def get_all_invites(self) -> dict[str, InviteRecord]:
        """Snapshot every invite in one read transaction."""

        async def _all(conn: AsyncConnection) -> dict[str, InviteRecord]:
            result = await conn.execute(
                select(invites_table.c.id, invites_table.c.payload)
            )
            return {row.id: decode(row.payload) for row in result}

        return await self._transaction(_all, mode="DEFERRED")

    async def replace_all_invites(self, invites: Mapping[str, InviteRecord]) -> None:
        """Discard every invite and install exactly ``invites``, atomically."""
        check_guest_bounds(invites)
        rows = [
            {"id": invite_id, "payload": encode(record)}
            for invite_id, record in invites.items()
        ]

        async def _replace(conn: AsyncConnection) -> None:
            await conn.execute(delete(invites_table))
            if rows:
                await conn.execute(insert(invites_table), rows)

        await self._transaction(_replace)

    async def close(self) -> None:
        """Dispose the engine, releasing the file lock."""
        if self._engine is None:
            return
        engine, self._engine = self._engine, None
        try:
            await engine.dispose()
        except SQLAlchemyError as e:
            raise StoreError(f"closing invite database: {e}") from e

    async def _transaction(
        self,
        body: Callable[[AsyncConnection], Awaitable[T]],
        mode: str = "IMMEDIATE",
    ) -> T:
        if self._engine is None:
            raise StoreError("store is closed")
        engine = self._engine

        async def _run() -> T:
            async with engine.connect() as conn:
                conn = await conn.execution_options(**{BEGIN_MODE: mode})
                async with conn.begin():
                    return await body(conn)

        try:
            return await asyncio.shield(_run())
        except (SQLAlchemyError, OSError) as e:
            raise StoreError(f"invite store transaction failed: {e}") from e

    @staticmethod
    async def _load(conn: AsyncConnection, invite_id: str) -> InviteRecord | None:
        result = await conn.execute(
            select(invites_table.c.payload).where(invites_table.c.id == invite_id)
        )
        payload = result.scalar_one_or_none()
        return decode(payload) if payload is not None else None

    @staticmethod
    async def _put(conn: AsyncConnection, invite_id: str, record: InviteRecord) -> None:
        await conn.execute(
            update(invites_table)
            .where(invites_table.c.id == invite_id)
            .values(payload=encode(record))
        )
