"""
Tests for settlement endpoints.
"""
import pytest
from fastapi.testclient import TestClient
from household_ledger.main import app
from household_ledger.db.session import get_db


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def headers_for(caller):
    return {
        "X-Member-Id": str(caller.member_id),
        "X-Household-Id": str(caller.household_id),
        "X-Member-Role": caller.role.value,
    }


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_missing_identity_is_rejected(client):
    response = client.get("/api/settlements")
    assert response.status_code == 401


def test_run_and_finalize(client, members, admin, add_income, add_expense):
    alice, bob = members["alice"], members["bob"]
    add_income(alice, 300000)
    add_income(bob, 200000)
    add_expense(alice, 10000)

    response = client.post("/api/settlements/run", json={"year": 2024, "month": 3}, headers=headers_for(admin))
    assert response.status_code == 200
    draft = response.json()
    assert draft["status"] == "DRAFT"
    assert [(l["from_member_id"], l["to_member_id"], l["amount"]) for l in draft["lines"]] == [
        (bob.id, alice.id, 4000)
    ]

    response = client.post(f"/api/settlements/{draft['id']}/finalize", headers=headers_for(admin))
    assert response.status_code == 200
    assert response.json()["status"] == "FINALIZED"
    assert response.json()["finalized_by"] == alice.id

    response = client.post(f"/api/settlements/{draft['id']}/finalize", headers=headers_for(admin))
    assert response.status_code == 409

    response = client.post("/api/settlements/run", json={"year": 2024, "month": 3}, headers=headers_for(admin))
    assert response.status_code == 409
    assert "already finalized" in response.json()["error"]


def test_member_cannot_finalize(client, member):
    draft = client.post("/api/settlements/run", json={"year": 2024, "month": 3}, headers=headers_for(member)).json()

    response = client.post(f"/api/settlements/{draft['id']}/finalize", headers=headers_for(member))
    assert response.status_code == 403


def test_invalid_month_is_rejected(client, admin):
    response = client.post("/api/settlements/run", json={"year": 2024, "month": 13}, headers=headers_for(admin))
    assert response.status_code == 422


def test_last_supported_month(client, admin):
    response = client.post("/api/settlements/run", json={"year": 9999, "month": 12}, headers=headers_for(admin))
    assert response.status_code == 200
    assert (response.json()["year"], response.json()["month"]) == (9999, 12)


def test_get_and_list(client, admin):
    client.post("/api/settlements/run", json={"year": 2024, "month": 1}, headers=headers_for(admin))
    created = client.post("/api/settlements/run", json={"year": 2024, "month": 2}, headers=headers_for(admin)).json()

    response = client.get("/api/settlements", headers=headers_for(admin))
    assert response.status_code == 200
    assert [(s["year"], s["month"]) for s in response.json()] == [(2024, 2), (2024, 1)]

    response = client.get(f"/api/settlements/{created['id']}", headers=headers_for(admin))
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    response = client.get("/api/settlements/month/2024/2", headers=headers_for(admin))
    assert response.json()["id"] == created["id"]

    assert client.get("/api/settlements/month/2024/5", headers=headers_for(admin)).status_code == 404
    assert client.get("/api/settlements/999", headers=headers_for(admin)).status_code == 404
