"""Invite record entity.

An invite addresses one party (one or more people) and may allow a bounded
number of extra guests. Every successful read of the invite is recorded in
``viewed_at``; acceptance is one-way.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import Field, field_validator

from rsvp.domain.error import ValidationError
from rsvp.domain.model.common import DomainModel

ACCEPT_ONLY_MESSAGE = "only accepted=true updates are allowed"

_TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_utc(t: datetime) -> datetime:
    # Naive timestamps in seed or admin payloads are taken to be UTC
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


class InviteRecord(DomainModel):
    """Invite record as persisted by the invite store.

    Business rules:
    - ``len(additional)`` never exceeds ``additional_count``
    - ``accepted`` only goes from False to True
    - ``viewed_at`` is append-only, one entry per view
    - ``accepted_at`` is stamped on every successful acceptance
    """

    people: list[str] = Field(min_length=1)
    additional_count: int = Field(ge=0)
    additional: list[str] = Field(default_factory=list)
    accepted: bool = False
    viewed_at: list[datetime] = Field(default_factory=list)
    accepted_at: Optional[datetime] = None

    @field_validator("additional", "viewed_at", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat an explicit null list as empty."""
        return [] if v is None else v

    @field_validator("viewed_at")
    @classmethod
    def views_in_utc(cls, v: list[datetime]) -> list[datetime]:
        return [_as_utc(t) for t in v]

    @field_validator("accepted_at")
    @classmethod
    def accepted_in_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v) if v is not None else None

    @property
    def is_opened(self) -> bool:
        """Whether the invite has been viewed at least once."""
        return len(self.viewed_at) > 0

    def exceeds_guest_bound(self) -> bool:
        return len(self.additional) > self.additional_count

    def viewed(self, at: datetime) -> "InviteRecord":
        """Return a copy with one more view recorded.

        Views stay strictly ordered even when the clock does not advance
        between two reads.
        """
        if self.viewed_at and at <= self.viewed_at[-1]:
            at = self.viewed_at[-1] + _TICK
        return self.model_copy(update={"viewed_at": [*self.viewed_at, at]})

    def accept(self, accepted: bool, additional: list[str], at: datetime) -> "InviteRecord":
        """Return the accepted copy of this invite.

        ``additional`` replaces any previously confirmed guests.

        Raises:
            ValidationError: If ``accepted`` is False or too many guests are given
        """
        if not accepted:
            raise ValidationError(ACCEPT_ONLY_MESSAGE)

        if len(additional) > self.additional_count:
            raise ValidationError(
                f"too many additional guests: got {len(additional)}, "
                f"max allowed {self.additional_count}"
            )

        return self.model_copy(
            update={
                "accepted": True,
                "additional": list(additional),
                "accepted_at": at,
            }
        )
