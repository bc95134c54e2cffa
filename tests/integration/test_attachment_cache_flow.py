"""Integration tests for cached attachment listings over HTTP."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from main import MediaLibraryApp
from src.plugins.attachment_query_cache.const import CACHE_GROUP
from src.shared.config import Config
from tests.test_const import IMAGE_MIME, T0, T1

BUNDLED_PLUGINS_DIR = Path(__file__).resolve().parents[2] / "src" / "plugins"


class Clock:
    """Settable replacement for time.time."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class TestAttachmentCacheFlow:
    """A cached listing stays cached until an attachment is written."""

    @pytest.fixture
    def media_app(self):
        media_app = MediaLibraryApp(Config(database_path=":memory:", plugins_dir=BUNDLED_PLUGINS_DIR))
        yield media_app
        media_app.close()

    @pytest.fixture
    def clock(self, media_app):
        clock = Clock(T0)
        media_app.plugin_registry.get_plugin("attachment_query_cache").token_store.clock = clock
        return clock

    @pytest.fixture
    def client(self, media_app):
        return TestClient(media_app.app)

    def _list(self, client):
        response = client.post("/ajax/query-attachments", json={"query": {"post_mime_type": "image"}})
        assert response.status_code == 200
        return [item["id"] for item in response.json()]

    def _cached_entries(self, media_app):
        return [
            key for (group, key) in media_app.object_cache.cache
            if group == CACHE_GROUP and key.startswith("cached_query_")
        ]

    def test_listing_cached_then_invalidated_by_write(self, media_app, client, clock):
        first = client.post("/attachments", json={"title": "Sunset", "mime_type": IMAGE_MIME}).json()

        assert self._list(client) == [first["id"]]
        assert len(self._cached_entries(media_app)) == 1

        media_app.repository.find_ids = lambda *args, **kwargs: []
        assert self._list(client) == [first["id"]]
        del media_app.repository.find_ids

        clock.now = T1
        second = client.post("/attachments", json={"title": "Harbor", "mime_type": IMAGE_MIME}).json()

        assert sorted(self._list(client)) == sorted([first["id"], second["id"]])
        assert len(self._cached_entries(media_app)) == 2

    def test_meta_write_invalidates_listing(self, media_app, client, clock):
        created = client.post("/attachments", json={"title": "Sunset", "mime_type": IMAGE_MIME}).json()
        self._list(client)

        clock.now = T1
        client.put(f"/attachments/{created['id']}/meta/alt", json={"value": "Orange sky"})
        token = media_app.plugin_registry.get_plugin("attachment_query_cache").get_invalidation_token()

        assert token == str(T1)

    def test_deleted_attachment_leaves_listing(self, client, clock):
        doomed = client.post("/attachments", json={"title": "Doomed", "mime_type": IMAGE_MIME}).json()
        assert self._list(client) == [doomed["id"]]

        clock.now = T1
        client.delete(f"/attachments/{doomed['id']}")

        assert self._list(client) == []
