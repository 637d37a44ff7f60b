"""Invite store interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from rsvp.domain.error import ValidationError
from rsvp.domain.model.invite import InviteRecord


class InviteStore(ABC):
    """Sole authority over invite persistence.

    Every operation runs as one indivisible unit against the backing
    container. Implementations never log or swallow errors; failures are
    raised as ``StoreError`` (I/O, corruption) or ``ValidationError``
    (business rule) for the caller to present.
    """

    @abstractmethod
    async def get_invite(self, invite_id: str) -> InviteRecord | None:
        """Look up an invite and record the view.

        The view timestamp is persisted before the record is returned, in the
        same write transaction as the read.

        Args:
            invite_id: The invite's identifier

        Returns:
            The invite including the new view, None if absent
        """
        pass

    @abstractmethod
    async def update_invite(
        self, invite_id: str, accepted: bool, additional: list[str]
    ) -> InviteRecord | None:
        """Accept an invite, replacing its confirmed extra guests.

        Args:
            invite_id: The invite's identifier
            accepted: Must be True
            additional: Extra guest names, replaces any previous list

        Returns:
            The accepted invite, None if absent

        Raises:
            ValidationError: If accepted is False or too many guests are given
        """
        pass

    @abstractmethod
    async def seed(self, invites: Mapping[str, InviteRecord]) -> list[str]:
        """Insert invites whose ids are not already present.

        Existing ids are skipped untouched, so seeding twice is a no-op.

        Args:
            invites: Records keyed by id, installed verbatim

        Returns:
            Ids that were inserted
        """
        pass

    @abstractmethod
    async def get_all_invites(self) -> dict[str, InviteRecord]:
        """Snapshot every invite as of one committed state."""
        pass

    @abstractmethod
    async def replace_all_invites(self, invites: Mapping[str, InviteRecord]) -> None:
        """Atomically discard every invite and install exactly ``invites``.

        Raises:
            ValidationError: If any record has more guests than its bound;
                nothing is changed
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the backing container. Safe to call more than once."""
        pass


def check_guest_bounds(invites: Mapping[str, InviteRecord]) -> None:
    """Reject a bulk load that breaks the guest bound of any record.

    Raises:
        ValidationError: Naming the first offending id
    """
    for invite_id, record in invites.items():
        if record.exceeds_guest_bound():
            raise ValidationError(
                f"invite {invite_id}: too many additional guests: got "
                f"{len(record.additional)}, max allowed {record.additional_count}"
            )
