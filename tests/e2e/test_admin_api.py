"""End-to-end tests for the admin API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from rsvp.config import RateLimitSettings, Settings
from rsvp.interface.api.app import create_admin_app, create_app
from tests.di import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def admin_client(container):
    with TestClient(create_admin_app(container)) as test_client:
        yield test_client


def invite_payload(people, additional_count=0, **fields):
    return {"people": people, "additional_count": additional_count, **fields}


class TestAdminInvites:
    """Tests for GET and PUT /admin/invites."""

    def test_empty_store(self, admin_client):
        response = admin_client.get("/admin/invites")

        assert response.status_code == 200
        assert response.json() == {}

    def test_put_then_get(self, admin_client):
        # Arrange
        invites = {
            "a": invite_payload(["Иван Петров"], 2),
            "b": invite_payload(
                ["Анна"],
                1,
                additional=["Пётр"],
                accepted=True,
                accepted_at="2024-05-01T10:00:00Z",
            ),
        }

        # Act
        put_response = admin_client.put("/admin/invites", json=invites)
        get_response = admin_client.get("/admin/invites")

        # Assert
        assert put_response.status_code == 200
        assert get_response.status_code == 200
        body = get_response.json()
        assert set(body) == {"a", "b"}
        assert body["a"]["people"] == ["Иван Петров"]
        assert body["a"]["additional_count"] == 2
        assert body["a"]["viewed_at"] == []
        assert body["b"]["accepted"] is True
        assert body["b"]["additional"] == ["Пётр"]

    def test_put_replaces_everything(self, admin_client):
        # Arrange
        admin_client.put("/admin/invites", json={"old": invite_payload(["Старый"])})

        # Act
        admin_client.put("/admin/invites", json={"new": invite_payload(["Новый"])})

        # Assert
        assert set(admin_client.get("/admin/invites").json()) == {"new"}

    def test_put_empty_map_clears(self, admin_client):
        admin_client.put("/admin/invites", json={"old": invite_payload(["Старый"])})

        response = admin_client.put("/admin/invites", json={})

        assert response.status_code == 200
        assert admin_client.get("/admin/invites").json() == {}

    def test_guest_overflow_is_rejected(self, admin_client):
        # Arrange
        admin_client.put("/admin/invites", json={"old": invite_payload(["Старый"])})

        # Act
        response = admin_client.put(
            "/admin/invites",
            json={"bad": invite_payload(["Анна"], 0, additional=["Пётр"])},
        )

        # Assert
        assert response.status_code == 400
        assert "too many additional guests" in response.json()["message"]
        assert set(admin_client.get("/admin/invites").json()) == {"old"}

    def test_malformed_record_is_rejected(self, admin_client):
        response = admin_client.put(
            "/admin/invites", json={"bad": {"people": [], "additional_count": 0}}
        )

        assert response.status_code == 400
        assert "message" in response.json()


class TestSharedStore:
    """Public and admin apps built on one container share one store."""

    def test_admin_load_is_visible_publicly(self, container):
        # Arrange
        invite_id = str(uuid4())
        settings = Settings(rate_limit=RateLimitSettings(enabled=False))

        with TestClient(create_admin_app(container)) as admin_client, TestClient(
            create_app(container, settings)
        ) as public_client:
            admin_client.put(
                "/admin/invites", json={invite_id: invite_payload(["Иван Петров"], 1)}
            )

            # Act
            public_response = public_client.put(
                f"/invites/{invite_id}", json={"accepted": True, "additional": ["Анна"]}
            )
            admin_view = admin_client.get("/admin/invites").json()

        # Assert
        assert public_response.status_code == 200
        assert admin_view[invite_id]["accepted"] is True
        assert admin_view[invite_id]["additional"] == ["Анна"]
        assert admin_view[invite_id]["accepted_at"] is not None
