"""Tests for master profile API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cv_composer.api.main import app
from cv_composer.services.users import create_user

USERNAME = "ada"
HEADERS = {"X-Username": USERNAME}
BASE = f"/api/users/{USERNAME}"


@pytest.fixture
def client() -> TestClient:
    create_user(USERNAME)
    return TestClient(app)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "healthy"}


def test_completion_counts_fixed_sections(client: TestClient) -> None:
    client.post(f"{BASE}/work-experiences", json={"company": "A", "title": "B"}, headers=HEADERS)
    client.post(f"{BASE}/educations", json={"institution": "C", "degree": "D"}, headers=HEADERS)
    client.post(f"{BASE}/profile/project", json={"name": "Engine"}, headers=HEADERS)

    response = client.get(f"{BASE}/profile/completion", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["completed_sections"] == 3
    assert data["total_sections"] == 9
    assert data["percentage"] == 33
    assert [section["key"] for section in data["sections"]][0] == "motivationVision"


def test_motivation_vision_counts_once_a_key_field_is_set(client: TestClient) -> None:
    client.put(f"{BASE}/profile/motivation-vision", json={"purpose": "x"}, headers=HEADERS)
    assert client.get(f"{BASE}/profile/completion", headers=HEADERS).json()["percentage"] == 0

    response = client.put(
        f"{BASE}/profile/motivation-vision", json={"vision": "Engines"}, headers=HEADERS
    )
    assert response.json()["purpose"] == "x"
    assert client.get(f"{BASE}/profile/completion", headers=HEADERS).json()["percentage"] == 11


def test_generic_entries(client: TestClient) -> None:
    response = client.post(
        f"{BASE}/profile/skill_category",
        json={"category": "Math", "skills": ["Analysis", "Algebra"]},
        headers=HEADERS,
    )
    assert response.status_code == 201
    entry_id = response.json()["id"]

    listed = client.get(f"{BASE}/profile/skill_category", headers=HEADERS).json()
    assert listed[0]["skills"] == ["Analysis", "Algebra"]

    response = client.delete(f"{BASE}/profile/skill_category/{entry_id}", headers=HEADERS)
    assert response.status_code == 204
    assert client.get(f"{BASE}/profile/skill_category", headers=HEADERS).json() == []


def test_generic_entry_validation(client: TestClient) -> None:
    response = client.post(f"{BASE}/profile/certification", json={"name": "CKA"}, headers=HEADERS)
    assert response.status_code == 422
    assert client.get(f"{BASE}/profile/hobby", headers=HEADERS).status_code == 404


def test_contact_profile(client: TestClient) -> None:
    assert client.get(f"{BASE}/profile/contact", headers=HEADERS).status_code == 404

    response = client.put(
        f"{BASE}/profile/contact",
        json={"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
        headers=HEADERS,
    )
    assert response.status_code == 200
    client.put(f"{BASE}/profile/contact", json={"location": "London"}, headers=HEADERS)

    data = client.get(f"{BASE}/profile/contact", headers=HEADERS).json()
    assert data["email"] == "ada@example.com"
    assert data["location"] == "London"


def test_education_crud(client: TestClient) -> None:
    response = client.post(
        f"{BASE}/educations",
        json={"institution": "Home", "degree": "Tutoring", "start_date": "1830-01-01"},
        headers=HEADERS,
    )
    assert response.status_code == 201
    education_id = response.json()["id"]

    bad = client.patch(
        f"{BASE}/educations/{education_id}", json={"end_date": "1820-01-01"}, headers=HEADERS
    )
    assert bad.status_code == 400

    ok = client.patch(f"{BASE}/educations/{education_id}", json={"grade": "A"}, headers=HEADERS)
    assert ok.json()["grade"] == "A"
    assert client.delete(f"{BASE}/educations/{education_id}", headers=HEADERS).status_code == 204
    assert client.get(f"{BASE}/educations/{education_id}", headers=HEADERS).status_code == 404
