from fastapi.testclient import TestClient


def test_healthz(client: TestClient):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert "X-Request-ID" in response.headers


def test_readyz(client: TestClient):
    response = client.get("/readyz")

    assert response.status_code == 200
    assert response.json()["ready"] is True


def test_unknown_route_uses_error_body(client: TestClient):
    response = client.get("/no-such-route")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
