"""Admin routes for bulk invite management.

Served on the admin port only. There is no authentication at this layer;
the admin listener is expected to sit behind a privileged network boundary.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, HTTPException, status

from rsvp.domain.error import ValidationError
from rsvp.domain.model.invite import InviteRecord
from rsvp.domain.service import InviteService
from rsvp.interface.api.errors import INTERNAL_ERROR
from rsvp.persistence.error import StoreError

router = APIRouter(prefix="/admin/invites", tags=["admin"], route_class=DishkaRoute)


@router.get("", response_model=dict[str, InviteRecord])
async def get_admin_invites(
    invite_service: FromDishka[InviteService],
) -> dict[str, InviteRecord]:
    """Get every invite keyed by id, in the stored record shape.

    Raises:
        HTTPException: 500 if the store fails
    """
    try:
        return await invite_service.list_invites()
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR,
        )


@router.put("", response_model=dict[str, InviteRecord])
async def put_admin_invites(
    invite_service: FromDishka[InviteService],
    invites: dict[str, InviteRecord] = Body(...),
) -> dict[str, InviteRecord]:
    """Replace every invite with the supplied set.

    Args:
        invite_service: Invite service from DI
        invites: Full replacement set keyed by id

    Returns:
        The stored set

    Raises:
        HTTPException: 400 if a record breaks its guest bound,
            500 if the store fails
    """
    try:
        await invite_service.replace_invites(invites)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR,
        )

    return invites
