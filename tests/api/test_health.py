"""Health Routes — liveness is independent of the database."""


async def test_liveness_probe(client):
    response = await client.get("/api/v1/health/")

    assert response.status_code == 200
    assert response.json()["service"] == "dashboard-actions"
