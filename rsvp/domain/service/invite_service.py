"""Invite domain service."""

from collections.abc import Mapping

import logfire

from rsvp.domain.error import ValidationError
from rsvp.domain.model.invite import InviteRecord
from rsvp.domain.repository import InviteStore
from rsvp.persistence.error import StoreError

from .base import Service


class InviteService(Service):
    """Domain service for RSVP operations.

    Thin over the store: the store owns atomicity and the business rules,
    this layer traces each call and logs its outcome. Errors are re-raised
    unchanged for the interface layer to map.
    """

    def __init__(self, invite_store: InviteStore) -> None:
        """Initialize invite service.

        Args:
            invite_store: Invite store
        """
        self.invite_store = invite_store

    async def get_invite(self, invite_id: str) -> InviteRecord | None:
        """Get an invite, recording the view.

        Args:
            invite_id: Invite identifier

        Returns:
            Invite if found, None otherwise

        Raises:
            StoreError: If the store fails
        """
        with logfire.span("invite_service.get_invite", invite_id=invite_id):
            try:
                invite = await self.invite_store.get_invite(invite_id)
            except StoreError as e:
                logfire.error("Failed to get invite", invite_id=invite_id, error=str(e))
                raise

            if invite is None:
                logfire.info("Invite not found", invite_id=invite_id)
            else:
                logfire.info(
                    "Invite viewed", invite_id=invite_id, views=len(invite.viewed_at)
                )
            return invite

    async def accept_invite(
        self, invite_id: str, accepted: bool, additional: list[str]
    ) -> InviteRecord | None:
        """Accept an invite with its confirmed extra guests.

        Args:
            invite_id: Invite identifier
            accepted: Must be True
            additional: Extra guest names

        Returns:
            Accepted invite, None if not found

        Raises:
            ValidationError: If the update breaks a business rule
            StoreError: If the store fails
        """
        with logfire.span(
            "invite_service.accept_invite",
            invite_id=invite_id,
            additional_count=len(additional),
        ):
            try:
                invite = await self.invite_store.update_invite(
                    invite_id, accepted, additional
                )
            except ValidationError as e:
                logfire.warn("Invite update rejected", invite_id=invite_id, reason=str(e))
                raise
            except StoreError as e:
                logfire.error("Failed to update invite", invite_id=invite_id, error=str(e))
                raise

            if invite is None:
                logfire.info("Invite not found for acceptance", invite_id=invite_id)
            else:
                logfire.info(
                    "Invite accepted",
                    invite_id=invite_id,
                    additional=len(invite.additional),
                )
            return invite

    async def list_invites(self) -> dict[str, InviteRecord]:
        """Get every invite keyed by id.

        Raises:
            StoreError: If the store fails
        """
        with logfire.span("invite_service.list_invites"):
            try:
                invites = await self.invite_store.get_all_invites()
            except StoreError as e:
                logfire.error("Failed to list invites", error=str(e))
                raise

            logfire.info("Invites listed", count=len(invites))
            return invites

    async def replace_invites(self, invites: Mapping[str, InviteRecord]) -> None:
        """Replace the whole invite set.

        Raises:
            ValidationError: If any record breaks its guest bound
            StoreError: If the store fails
        """
        with logfire.span("invite_service.replace_invites", count=len(invites)):
            try:
                await self.invite_store.replace_all_invites(invites)
            except ValidationError as e:
                logfire.warn("Invite replacement rejected", reason=str(e))
                raise
            except StoreError as e:
                logfire.error("Failed to replace invites", error=str(e))
                raise

            logfire.info("Invites replaced", count=len(invites))
