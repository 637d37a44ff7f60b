"""Initial dataset loading.

A seed file holds the invites to install at boot:

    {"invites": {"<id>": {"people": ["..."], "additional_count": 2}}}

Seeding skips ids that already exist, so the same file can be applied on
every start.
"""

from pathlib import Path

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from rsvp.domain.model.invite import InviteRecord
from rsvp.domain.repository import InviteStore


class SeedError(Exception):
    """Seed file exists but could not be read or parsed."""

    pass


class SeedData(BaseModel):
    """Seed file contents."""

    invites: dict[str, InviteRecord] = {}


def read_seed_file(path: Path) -> SeedData:
    """Parse a seed file.

    Raises:
        SeedError: If the file cannot be read or has the wrong shape
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise SeedError(f"reading seed file {path}: {e}") from e

    try:
        return SeedData.model_validate_json(raw)
    except PydanticValidationError as e:
        raise SeedError(f"parsing seed file {path}: {e}") from e


async def load_seed_file(path: Path | None, store: InviteStore) -> list[str]:
    """Seed the store from a file, if one is configured and present.

    Args:
        path: Seed file location; None disables seeding
        store: Store to seed

    Returns:
        Ids that were inserted

    Raises:
        SeedError: If the file exists but is unreadable or malformed
        StoreError: If the store write fails
    """
    if path is None:
        return []

    if not path.exists():
        logfire.warn("Seed file not found, skipping seeding", path=str(path))
        return []

    with logfire.span("seed.load_seed_file", path=str(path)):
        data = read_seed_file(path)
        logfire.info("Seeding invites from file", count=len(data.invites))

        inserted = await store.seed(data.invites)
        inserted_ids = set(inserted)
        for invite_id in data.invites:
            if invite_id in inserted_ids:
                logfire.info("Seeded invite", invite_id=invite_id)
            else:
                logfire.debug("Invite already exists, skipping", invite_id=invite_id)
        return inserted
