"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from slidedeck.main import app
from slidedeck.services.presentation_service import PresentationService
from slidedeck.state import STATE


@pytest.fixture()
def service(definition, scheduler, manual_clock, monkeypatch):
    svc = PresentationService(definition, scheduler=scheduler, now=manual_clock)
    monkeypatch.setattr(STATE, "service", svc)
    return svc


@pytest.fixture()
def client(service):
    return TestClient(app)


class TestReadEndpoints:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"ok": True, "started": False}

    def test_presentation_summary(self, client):
        data = client.get("/api/presentation").json()
        assert data["title"] == "Timing talk"
        assert data["slideCount"] == 5
        assert data["totalDuration"] == 70

    def test_state_on_front_page(self, client):
        data = client.get("/api/presentation/state").json()
        assert data["phase"] == "front-page"

    def test_page_renders_front_page(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert "<title>Timing talk</title>" in res.text
        assert 'id="front-page"' in res.text

    def test_not_loaded(self, monkeypatch):
        monkeypatch.setattr(STATE, "service", None)
        client = TestClient(app)
        assert client.get("/api/presentation").status_code == 503
        assert client.get("/").status_code == 503


class TestControlEndpoints:
    def test_navigation_before_start_is_conflict(self, client):
        res = client.post("/api/presentation/next")
        assert res.status_code == 409
        assert res.text == "Not started"

    def test_start_then_navigate(self, client, service):
        assert client.post("/api/presentation/start").json() == {"ok": True, "phase": "presenting"}
        assert client.post("/api/presentation/next").json() == {"ok": True, "index": 2}
        assert client.post("/api/presentation/previous").json() == {"ok": True, "index": 1}
        assert client.post("/api/presentation/previous").json() == {"ok": True, "index": 1}

    def test_toggle_timer(self, client, scheduler):
        client.post("/api/presentation/start")
        assert client.post("/api/presentation/toggle-timer").json() == {"ok": True, "running": False}
        assert client.post("/api/presentation/toggle-timer").json() == {"ok": True, "running": True}
        assert len(scheduler.active) == 1

    def test_key_starts_and_navigates(self, client, service):
        assert client.post("/api/presentation/key", json={"keyCode": 39}).json()["phase"] == "presenting"
        res = client.post("/api/presentation/key", json={"key": "ArrowRight"}).json()
        assert res["handled"] is True
        assert service.session.navigator.current_index == 2

    def test_key_missing(self, client):
        assert client.post("/api/presentation/key", json={}).status_code == 400

    def test_restart(self, client, service, scheduler):
        client.post("/api/presentation/start")
        assert client.post("/api/presentation/restart").json()["phase"] == "front-page"
        assert scheduler.active == {}

    def test_page_renders_session(self, client):
        client.post("/api/presentation/start")
        res = client.get("/")
        assert 'id="header"' in res.text
        assert 'id="timeline"' in res.text
        assert "Slide 1" in res.text


class TestMedia:
    def test_missing_media(self, client):
        assert client.get("/media/nope.png").status_code == 404

    def test_traversal_rejected(self, client):
        assert client.get("/media/..%2F..%2Fpresentation.json").status_code in (400, 404)
