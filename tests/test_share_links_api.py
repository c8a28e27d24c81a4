"""Tests for share link management and the public CV endpoint."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from cv_composer.api.main import app
from cv_composer.services.users import create_user

USERNAME = "grace"
HEADERS = {"X-Username": USERNAME}
BASE = f"/api/users/{USERNAME}"


@pytest.fixture
def client() -> TestClient:
    create_user(USERNAME)
    return TestClient(app)


@pytest.fixture
def cv_id(client: TestClient) -> int:
    client.put(
        f"{BASE}/profile/contact",
        json={
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "grace@example.com",
            "phone": "555-0100",
            "location": "New York",
        },
        headers=HEADERS,
    )
    client.post(
        f"{BASE}/profile/reference",
        json={
            "name": "Howard Aiken",
            "title": "Professor",
            "company": "Harvard",
            "email": "aiken@example.com",
        },
        headers=HEADERS,
    )
    layout = {
        "mode": "two-column",
        "pages": [{"sidebar": ["photo", "contact"], "main": ["header", "references"]}],
    }
    response = client.post(
        f"{BASE}/cvs",
        json={"name": "COBOL CV", "layout_mode": "two-column", "layout_config": layout},
        headers=HEADERS,
    )
    return response.json()["id"]


def _share(client: TestClient, cv_id: int, **body) -> dict:
    response = client.post(f"{BASE}/cvs/{cv_id}/share-links", json=body, headers=HEADERS)
    assert response.status_code == 201
    return response.json()


def test_default_link_is_personal(client: TestClient, cv_id: int) -> None:
    link = _share(client, cv_id)
    assert link["privacy_level"] == "personal"

    data = client.get(f"/api/public/cv/{link['token']}").json()

    assert data["profile"]["display_name"] == "Grace Hopper"
    assert data["profile"]["location"] == "New York"
    assert data["profile"]["email"] is None
    assert data["profile"]["phone"] is None
    reference = data["sections"]["reference"][0]["details"]
    assert reference["name"] == "Howard Aiken"
    assert "email" not in reference


def test_no_privacy_shows_contact(client: TestClient, cv_id: int) -> None:
    link = _share(client, cv_id, privacy_level="none")

    data = client.get(f"/api/public/cv/{link['token']}").json()

    assert data["profile"]["email"] == "grace@example.com"
    assert data["title"] == "COBOL CV"
    assert data["sections"]["reference"][0]["details"]["email"] == "aiken@example.com"


def test_full_privacy_anonymizes(client: TestClient, cv_id: int) -> None:
    link = _share(client, cv_id, privacy_level="full")

    data = client.get(f"/api/public/cv/{link['token']}").json()

    assert data["profile"]["display_name"] == "Anonymous"
    assert data["profile"]["location"] is None
    assert data["profile"]["show_privacy_badge"] is True
    assert data["title"] is None
    assert data["pages"][0]["sidebar"] == []


def test_views_are_counted(client: TestClient, cv_id: int) -> None:
    link = _share(client, cv_id)
    for _ in range(3):
        client.get(f"/api/public/cv/{link['token']}")

    links = client.get(f"{BASE}/cvs/{cv_id}/share-links", headers=HEADERS).json()
    assert links[0]["view_count"] == 3
    assert links[0]["last_viewed_at"] is not None


def test_deactivated_and_expired_links_are_gone(client: TestClient, cv_id: int) -> None:
    link = _share(client, cv_id)
    response = client.patch(
        f"{BASE}/share-links/{link['id']}", json={"is_active": False}, headers=HEADERS
    )
    assert response.json()["is_active"] is False
    assert client.get(f"/api/public/cv/{link['token']}").status_code == 410

    expired = _share(client, cv_id, expires_at="2000-01-01T00:00:00Z")
    assert client.get(f"/api/public/cv/{expired['token']}").status_code == 410


def test_unknown_and_deleted_tokens_are_404(client: TestClient, cv_id: int) -> None:
    assert client.get("/api/public/cv/nope").status_code == 404

    link = _share(client, cv_id)
    assert client.delete(f"{BASE}/share-links/{link['id']}", headers=HEADERS).status_code == 204
    assert client.get(f"/api/public/cv/{link['token']}").status_code == 404


def test_invalid_privacy_level_is_422(client: TestClient, cv_id: int) -> None:
    response = client.post(
        f"{BASE}/cvs/{cv_id}/share-links", json={"privacy_level": "public"}, headers=HEADERS
    )
    assert response.status_code == 422


def test_sharing_missing_document_is_404(client: TestClient) -> None:
    response = client.post(f"{BASE}/cvs/42/share-links", json={}, headers=HEADERS)
    assert response.status_code == 404


def test_expiry_with_utc_offset_is_compared_as_an_instant(client: TestClient, cv_id: int) -> None:
    now = datetime.now(UTC)
    east = timezone(timedelta(hours=5))
    west = timezone(timedelta(hours=-5))

    an_hour_ago = (now - timedelta(hours=1)).astimezone(east)
    in_an_hour = (now + timedelta(hours=1)).astimezone(west)

    expired = _share(client, cv_id, expires_at=an_hour_ago.isoformat())
    valid = _share(client, cv_id, expires_at=in_an_hour.isoformat())

    assert client.get(f"/api/public/cv/{expired['token']}").status_code == 410
    assert client.get(f"/api/public/cv/{valid['token']}").status_code == 200


def test_updating_expiry_with_utc_offset(client: TestClient, cv_id: int) -> None:
    link = _share(client, cv_id)
    past = (datetime.now(UTC) - timedelta(minutes=30)).astimezone(timezone(timedelta(hours=9)))

    response = client.patch(
        f"{BASE}/share-links/{link['id']}", json={"expires_at": past.isoformat()}, headers=HEADERS
    )

    assert response.status_code == 200
    assert client.get(f"/api/public/cv/{link['token']}").status_code == 410


@pytest.mark.parametrize("level", ["none", "personal", "full"])
def test_public_entries_carry_only_listed_fields(
    client: TestClient, cv_id: int, level: str
) -> None:
    link = _share(client, cv_id, privacy_level=level)

    (reference,) = client.get(f"/api/public/cv/{link['token']}").json()["sections"]["reference"]

    assert set(reference) == {
        "kind",
        "details",
        "description",
        "items",
        "display_mode",
        "is_favorite",
    }
    assert "user_id" not in reference["details"]
    assert "id" not in reference["details"]
    contact = {"email", "phone"} & set(reference["details"])
    assert contact == ({"email", "phone"} if level == "none" else set())
