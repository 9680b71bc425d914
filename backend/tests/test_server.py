"""Tests for the HTTP server: health endpoints and client bundle serving."""

import pytest
from fastapi.testclient import TestClient

from src.api import spa
from src.main import app


@pytest.fixture
def dist_dir(tmp_path, monkeypatch):
    root = (tmp_path / "dist").resolve()
    root.mkdir()
    monkeypatch.setattr(spa, "client_dist_dir", lambda: root)
    return root


@pytest.fixture
def client(dist_dir):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def built_client(dist_dir):
    (dist_dir / "index.html").write_text("<!doctype html><div id=root></div>")
    assets = dist_dir / "assets"
    assets.mkdir()
    (assets / "app.js").write_text("console.log('studio')")
    return dist_dir


class TestApiRoutes:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "timestamp" in body

    def test_test_message(self, client):
        response = client.get("/api/test")
        assert response.status_code == 200
        assert response.json() == {"message": "AI Film Studio API is working!"}


class TestClientBundle:
    def test_asset_is_served_immutable(self, client, built_client):
        response = client.get("/assets/app.js")
        assert response.status_code == 200
        assert response.text == "console.log('studio')"
        assert response.headers["cache-control"] == "public, max-age=31536000, immutable"

    def test_client_route_falls_back_to_index(self, client, built_client):
        response = client.get("/projects/42/timeline")
        assert response.status_code == 200
        assert "id=root" in response.text
        assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"

    def test_root_serves_index(self, client, built_client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"

    def test_path_traversal_falls_back_to_index(self, client, built_client):
        (built_client.parent / "secret.txt").write_text("nope")
        response = client.get("/..%2Fsecret.txt")
        assert "nope" not in response.text

    def test_missing_index_is_json_404(self, client):
        response = client.get("/anything")
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}


def test_resolve_asset_stays_inside_dist(tmp_path):
    root = tmp_path.resolve()
    (root / "dist").mkdir()
    (root / "dist" / "a.css").write_text("")
    (root / "outside.css").write_text("")

    assert spa.resolve_asset(root / "dist", "a.css") == root / "dist" / "a.css"
    assert spa.resolve_asset(root / "dist", "../outside.css") is None
    assert spa.resolve_asset(root / "dist", "") is None
    assert spa.resolve_asset(root / "dist", "missing.css") is None
