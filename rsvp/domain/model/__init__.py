"""Domain models."""

from rsvp.domain.model.common import DomainModel
from rsvp.domain.model.invite import InviteRecord

__all__ = [
    "DomainModel",
    "InviteRecord",
]
