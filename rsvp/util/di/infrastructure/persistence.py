"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from rsvp.config import DatabaseSettings, Settings
from rsvp.domain.repository import InviteStore
from rsvp.persistence.database import create_engine
from rsvp.persistence.repository import SqliteInviteStore
from rsvp.util.di.base import ProviderBase
from rsvp.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using an embedded SQLite file."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_invite_store(
        self, settings: Settings, database: DatabaseSettings
    ) -> AsyncIterator[InviteStore]:
        """Provide the process-wide invite store.

        The store is opened (and the database file locked) on first
        resolution and closed when the container closes.

        Raises:
            StoreOpenError: If the database cannot be opened or locked
        """
        engine = create_engine(database, echo=settings.debug)
        instrument_sqlalchemy(engine)

        store = await SqliteInviteStore.open(engine)
        logfire.info("Invite store opened", path=str(database.path))
        try:
            yield store
        finally:
            await store.close()
            logfire.info("Invite store closed", path=str(database.path))
