import pytest
from app import config

def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"

def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert "error" in response.json()

@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(config, "API_KEY", "secret")
    return "secret"

def test_api_key_required(client, api_key, process_form):
    response = client.post("/api/process-video", data=process_form)

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or missing API key"}

def test_api_key_accepted(client, api_key, process_form):
    response = client.post("/api/process-video", data=process_form, headers={"x-api-key": api_key})

    assert response.status_code == 200

def test_public_paths_skip_api_key(client, api_key):
    assert client.get("/").status_code == 200
    assert client.get("/api/mock-video/1").status_code == 200
