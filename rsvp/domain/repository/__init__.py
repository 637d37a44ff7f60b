"""Repository interfaces."""

from rsvp.domain.repository.invite import InviteStore, check_guest_bounds

__all__ = [
    "InviteStore",
    "check_guest_bounds",
]
