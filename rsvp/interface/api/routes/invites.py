"""Public invite routes."""

from typing import Annotated
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StringConstraints
from pydantic.alias_generators import to_camel

from rsvp.domain.error import ValidationError
from rsvp.domain.model.invite import ACCEPT_ONLY_MESSAGE, InviteRecord
from rsvp.domain.service import InviteService
from rsvp.interface.api.errors import INTERNAL_ERROR, NOT_FOUND
from rsvp.persistence.error import StoreError

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)

MAX_ADDITIONAL_GUESTS = 5

# Cyrillic words separated by single spaces, hyphens or apostrophes
GuestName = Annotated[
    str,
    StringConstraints(
        min_length=1,
        max_length=100,
        pattern="^[Ѐ-ӿ]+(?:[ '-][Ѐ-ӿ]+)*$",
    ),
]


class InviteUpdateRequest(BaseModel):
    """API request for accepting an invite."""

    accepted: StrictBool = Field(
        validation_alias=AliasChoices("accepted", "isAccepted")
    )
    additional: list[GuestName] | None = Field(
        default=None, max_length=MAX_ADDITIONAL_GUESTS
    )


class InviteResponse(BaseModel):
    """Public view of an invite."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    people: list[str]
    additional_count: int
    additional: list[str] | None = None
    accepted: bool
    is_accepted: bool
    is_opened: bool

    @classmethod
    def from_record(cls, record: InviteRecord) -> "InviteResponse":
        """Project a stored record; confirmed guests are omitted when empty."""
        return cls(
            people=record.people,
            additional_count=record.additional_count,
            additional=record.additional or None,
            accepted=record.accepted,
            is_accepted=record.accepted,
            is_opened=record.is_opened,
        )


@router.get(
    "/{invite_id}", response_model=InviteResponse, response_model_exclude_none=True
)
async def get_invite(
    invite_id: UUID,
    invite_service: FromDishka[InviteService],
) -> InviteResponse:
    """Get an invite by id, recording that it was opened.

    Args:
        invite_id: Invite UUID
        invite_service: Invite service from DI

    Returns:
        Public invite projection

    Raises:
        HTTPException: 404 if not found, 500 if the store fails
    """
    try:
        invite = await invite_service.get_invite(str(invite_id))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR,
        )

    if invite is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    return InviteResponse.from_record(invite)


@router.put(
    "/{invite_id}", response_model=InviteResponse, response_model_exclude_none=True
)
async def put_invite(
    invite_id: UUID,
    request: InviteUpdateRequest,
    invite_service: FromDishka[InviteService],
) -> InviteResponse:
    """Accept an invite with the confirmed extra guests.

    Args:
        invite_id: Invite UUID
        request: Acceptance with optional extra guest names
        invite_service: Invite service from DI

    Returns:
        Public invite projection after acceptance

    Raises:
        HTTPException: 400 on a rejected update, 404 if not found,
            500 if the store fails
    """
    # The store enforces this too; rejecting here keeps it off the store
    if not request.accepted:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=ACCEPT_ONLY_MESSAGE
        )

    try:
        invite = await invite_service.accept_invite(
            str(invite_id), request.accepted, request.additional or []
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR,
        )

    if invite is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)

    return InviteResponse.from_record(invite)
