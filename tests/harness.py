"""Test harness for service and integration tests.

Persistence is either the in-memory store or the real SQLite store on a
scratch file under pytest's ``tmp_path``; nothing external needs to run.
"""

import pytest_asyncio

from rsvp.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Points the database at a fresh file in ``tmp_path``
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards, releasing the database lock

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - in-memory store
        unit_env = create_env_fixture()

        # Integration tests - SQLite store on a scratch file
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_get_invite(integration_env):
            service = await integration_env.get(InviteService)
            assert await service.get_invite("missing") is None
    """

    @pytest_asyncio.fixture
    async def _test_environment(tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE__PATH", str(tmp_path / "rsvp.db"))
        monkeypatch.setenv("ENVIRONMENT", "test")

        container = build_test_container(unmock=unmock or set())
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _test_environment
