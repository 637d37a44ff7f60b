"""Mock persistence providers for testing."""

from dishka import Scope, provide

from rsvp.domain.repository import InviteStore
from rsvp.persistence.repository.inmemory import InMemoryInviteStore
from rsvp.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using the in-memory invite store.

    Uses APP scope like the real store, so the public and admin apps built on
    one container see the same invites across requests. Each test builds its
    own container and so gets a fresh store.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_invite_store(self) -> InviteStore:
        """Provide in-memory invite store."""
        return InMemoryInviteStore()
