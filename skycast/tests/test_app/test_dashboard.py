"""Tests for the widget HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from skycast.config.schema import AppConfig
from skycast.dashboard import create_app
from skycast.display.formatters import IDLE_MESSAGE, ViewRenderer
from skycast.models.common import UnitSystem
from skycast.tests.fakes import FakeWeatherSource


@pytest.fixture
def client(app_config: AppConfig, fake_source: FakeWeatherSource, fixed_day) -> TestClient:
    app = create_app(
        app_config,
        client=fake_source,
        renderer=ViewRenderer(clock=lambda: fixed_day),
    )
    return TestClient(app)


class TestWidgetApi:
    def test_initial_view(self, client: TestClient):
        resp = client.get("/api/view")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "idle"
        assert body["message"] == IDLE_MESSAGE
        assert body["units"] == "metric"

    def test_search(self, client: TestClient):
        body = client.post("/api/search", json={"query": "Paris"}).json()
        assert body["status"] == "success"
        assert body["query"] == "Paris"
        assert body["current"]["title"] == "Paris, France"
        assert len(body["forecast"]) == 5

    def test_blank_search(self, client: TestClient, fake_source: FakeWeatherSource):
        body = client.post("/api/search", json={"query": "  "}).json()
        assert body["status"] == "idle"
        assert fake_source.calls == []

    def test_search_failure(self, client: TestClient, fake_source: FakeWeatherSource):
        fake_source.fail_current = True
        body = client.post("/api/search", json={"query": "Atlantis"}).json()
        assert body["status"] == "error"
        assert body["message"] == "City not found. Try another name."
        assert body["current"] is None
        assert body["forecast"] == []

    def test_toggle_refetches(self, client: TestClient, fake_source: FakeWeatherSource):
        client.post("/api/search", json={"query": "Paris"})
        fake_source.calls.clear()

        body = client.post("/api/units/toggle").json()

        assert body["units"] == "imperial"
        assert body["unit_symbol"] == "°F"
        assert fake_source.cities() == [("Paris", UnitSystem.IMPERIAL)]

    def test_toggle_without_city(self, client: TestClient, fake_source: FakeWeatherSource):
        body = client.post("/api/units/toggle").json()
        assert body["units"] == "imperial"
        assert body["status"] == "idle"
        assert fake_source.calls == []

    def test_malformed_body(self, client: TestClient):
        resp = client.post("/api/search", json={"city": "Paris"})
        assert resp.status_code == 422

    def test_health(self, client: TestClient):
        assert client.get("/api/health").json() == {
            "ok": True,
            "api_key_configured": True,
        }

    def test_widget_page(self, client: TestClient):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "enter city name" in resp.text


class TestMissingApiKey:
    def test_search_reports_config_error(self, fake_source: FakeWeatherSource):
        app = create_app(AppConfig(), client=fake_source)
        client = TestClient(app)

        body = client.post("/api/search", json={"query": "Paris"}).json()

        assert body["status"] == "error"
        assert body["message"] == "Missing API key configuration."
        assert fake_source.calls == []
        assert client.get("/api/health").json()["api_key_configured"] is False
