"""
Tests for service health endpoints.
"""


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_detailed_health_counts_rows(client, seeded):
    response = client.get("/health/detailed")

    assert response.status_code == 200
    database = response.json()["checks"]["database"]
    assert database == {"status": "healthy", "companies": 3, "jobs": 3}
