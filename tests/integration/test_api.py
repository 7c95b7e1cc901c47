"""Integration tests for the HTTP read API."""

import time

import pytest
from fastapi.testclient import TestClient

from daily_dispatch.api import create_app
from daily_dispatch.config.sites import SiteStore
from daily_dispatch.pipeline.aggregator import FeedAggregator
from daily_dispatch.storage.cache import ArticleCache

from conftest import FakeTransport, rss_feed, rss_item


@pytest.fixture
def site_store(temp_dir):
    return SiteStore(temp_dir / "sites.json", default="")


@pytest.fixture
def transport():
    return FakeTransport({
        "https://example.org/feed/": rss_feed(
            rss_item("Bridge reopens", "Traffic resumes.", "https://example.org/bridge"),
        ),
    })


@pytest.fixture
def cache(site_store, transport, clock):
    return ArticleCache(
        aggregator=FeedAggregator(transport=transport, clock=clock),
        site_source=site_store.load_sites,
    )


def wait_for_snapshot(client, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        data = client.get("/api/news").json()
        if data["fetchedAt"] is not None:
            return data
        time.sleep(0.02)
    raise AssertionError("snapshot was never published")


class TestNewsEndpoints:
    """Tests for /api/news."""

    def test_empty_before_first_pass(self, cache, site_store):
        app = create_app(cache=cache, site_store=site_store, initial_refresh=False)
        with TestClient(app) as client:
            response = client.get("/api/news")

        assert response.status_code == 200
        assert response.json() == {"items": [], "fetchedAt": None, "errors": []}

    def test_refresh_then_read(self, cache, site_store):
        site_store.save("example.org")
        app = create_app(cache=cache, site_store=site_store, initial_refresh=False)

        with TestClient(app) as client:
            ack = client.post("/api/news/refresh")
            assert ack.status_code == 200
            assert ack.json()["ok"] is True

            data = wait_for_snapshot(client)

        assert data["items"] == [{
            "title": "Bridge reopens",
            "description": "Traffic resumes.",
            "link": "https://example.org/bridge",
            "pubDate": "",
            "source": "example.org",
        }]
        assert data["errors"] == [{
            "feedUrl": "https://example.org/rss",
            "message": "Cannot connect to host for https://example.org/rss",
        }]

    def test_initial_refresh_on_startup(self, cache, site_store):
        site_store.save("example.org")
        app = create_app(cache=cache, site_store=site_store, initial_refresh_delay=0)

        with TestClient(app) as client:
            data = wait_for_snapshot(client)

        assert [item["title"] for item in data["items"]] == ["Bridge reopens"]

    def test_health(self, cache, site_store):
        app = create_app(cache=cache, site_store=site_store, initial_refresh=False)
        with TestClient(app) as client:
            data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["articles"] == 0
        assert data["refreshing"] is False


class TestSitesEndpoints:
    """Tests for /api/sites."""

    def test_save_and_load(self, cache, site_store):
        app = create_app(cache=cache, site_store=site_store, initial_refresh=False)
        with TestClient(app) as client:
            assert client.get("/api/sites").json() == {"sites": ""}

            response = client.post("/api/sites", json={"sites": "baltimoresun.com\nexample.org"})
            assert response.json() == {"ok": True}

            assert client.get("/api/sites").json() == {"sites": "baltimoresun.com\nexample.org"}

        assert site_store.load_sites() == ["baltimoresun.com", "example.org"]

    @pytest.mark.parametrize("body", [{"sites": ["a.example"]}, {"other": "x"}, [1, 2]])
    def test_rejects_non_string(self, cache, site_store, body):
        app = create_app(cache=cache, site_store=site_store, initial_refresh=False)
        with TestClient(app) as client:
            response = client.post("/api/sites", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "sites must be a string"}

    def test_write_failure_returns_json_error(self, cache, temp_dir):
        """An unwritable sites file gives a JSON error, not a bare 500."""
        (temp_dir / "blocker").write_text("not a directory")
        unwritable = SiteStore(temp_dir / "blocker" / "sites.json", default="")
        app = create_app(cache=cache, site_store=unwritable, initial_refresh=False)

        with TestClient(app) as client:
            response = client.post("/api/sites", json={"sites": "example.org"})

        assert response.status_code == 500
        assert response.json() == {"error": "could not save sites"}

    def test_rejects_invalid_json(self, cache, site_store):
        app = create_app(cache=cache, site_store=site_store, initial_refresh=False)
        with TestClient(app) as client:
            response = client.post(
                "/api/sites",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 400
