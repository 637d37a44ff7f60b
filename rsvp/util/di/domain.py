"""Domain layer DI providers."""

from dishka import Scope, provide

from rsvp.domain.repository import InviteStore
from rsvp.domain.service import InviteService
from rsvp.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped; the store they wrap is shared for the
    lifetime of the container.
    """

    scope = Scope.REQUEST

    @provide
    def get_invite_service(self, invite_store: InviteStore) -> InviteService:
        """Provide invite domain service."""
        return InviteService(invite_store=invite_store)
