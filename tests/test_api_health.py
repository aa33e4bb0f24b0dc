"""Tests for root and health endpoints."""


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Expense Tracker API is running!"


def test_health_check(client):
    """Health endpoint reports the result of a database round trip."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "up"
    assert "version" in data
