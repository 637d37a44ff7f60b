"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from rsvp.domain.model.invite import InviteRecord

EPOCH = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, start: datetime = EPOCH) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def make_invite(
    people: list[str] | None = None,
    additional_count: int = 0,
    **overrides,
) -> InviteRecord:
    """Build an unviewed, unaccepted invite for tests."""
    return InviteRecord(
        people=people or ["Иван Петров"],
        additional_count=additional_count,
        **overrides,
    )


@pytest.fixture
def clock() -> FakeClock:
    """Frozen clock starting at a fixed instant."""
    return FakeClock()
