"""Integration tests for the media and attachments slices."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from main import MediaLibraryApp
from src.shared.config import Config
from src.shared.exceptions import RepositoryError
from tests.test_const import IMAGE_MIME, PDF_MIME, TEST_AUTHOR, TEST_FILENAME, TEST_PARENT, TEST_TITLE, TEST_URL

BUNDLED_PLUGINS_DIR = Path(__file__).resolve().parents[2] / "src" / "plugins"


class TestMediaSlice:
    """Integration tests for the HTTP endpoints."""

    @pytest.fixture
    def media_app(self):
        """Application over an in-memory database with the bundled plugins."""
        media_app = MediaLibraryApp(Config(database_path=":memory:", plugins_dir=BUNDLED_PLUGINS_DIR))
        yield media_app
        media_app.close()

    @pytest.fixture
    def client(self, media_app):
        """Test client for the FastAPI app."""
        return TestClient(media_app.app)

    def _create(self, client, **fields):
        payload = {"title": TEST_TITLE, "mime_type": IMAGE_MIME}
        payload.update(fields)
        response = client.post("/attachments", json=payload)
        assert response.status_code == 201
        return response.json()

    def test_create_and_get_attachment(self, client):
        created = self._create(
            client, url=TEST_URL, parent=TEST_PARENT, author=TEST_AUTHOR, date="2024-05-10T12:00:00"
        )

        response = client.get(f"/attachments/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == TEST_TITLE
        assert data["filename"] == TEST_FILENAME
        assert data["type"] == "image"
        assert data["subtype"] == "jpeg"
        assert data["uploadedTo"] == TEST_PARENT
        assert data["date"] == "2024-05-10T12:00:00"

    def test_create_rejects_bad_mime_type(self, client):
        response = client.post("/attachments", json={"title": "x", "mime_type": "not a mime"})
        assert response.status_code == 422

    def test_update_attachment(self, client):
        created = self._create(client)

        response = client.patch(f"/attachments/{created['id']}", json={"title": "Renamed", "status": "private"})

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["status"] == "private"
        assert response.json()["mime"] == IMAGE_MIME

    def test_set_meta(self, client):
        created = self._create(client)

        response = client.put(f"/attachments/{created['id']}/meta/alt", json={"value": "Orange sky"})

        assert response.status_code == 200
        assert response.json()["meta"] == {"alt": "Orange sky"}

    def test_delete_attachment(self, client):
        created = self._create(client)

        response = client.delete(f"/attachments/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"deleted": True, "id": created["id"]}
        assert client.get(f"/attachments/{created['id']}").status_code == 404

    def test_unknown_attachment_returns_404(self, client):
        assert client.get("/attachments/999").status_code == 404
        assert client.patch("/attachments/999", json={"title": "x"}).status_code == 404
        assert client.delete("/attachments/999").status_code == 404
        assert client.put("/attachments/999/meta/alt", json={"value": "x"}).status_code == 404

    def test_query_attachments(self, client):
        image = self._create(client, title="Sunset")
        document = self._create(client, title="Manual", mime_type=PDF_MIME)
        self._create(client, title="Old", status="trash")

        everything = client.post("/ajax/query-attachments", json={"query": {}})
        images = client.post("/ajax/query-attachments", json={"query": {"post_mime_type": "image"}})
        searched = client.post("/ajax/query-attachments", json={"query": {"s": "manual"}})

        assert everything.status_code == 200
        assert sorted(item["id"] for item in everything.json()) == sorted([image["id"], document["id"]])
        assert [item["id"] for item in images.json()] == [image["id"]]
        assert [item["id"] for item in searched.json()] == [document["id"]]

    def test_query_attachments_ignores_non_numeric_values(self, client):
        image = self._create(client, title="Sunset")

        for query in (
            {"paged": "abc"},
            {"post_parent": "x"},
            {"author": "me", "year": "last", "monthnum": "may"},
            {"posts_per_page": "lots", "post__in": "a,b"},
        ):
            response = client.post("/ajax/query-attachments", json={"query": query})
            assert response.status_code == 200, query

        listed = client.post("/ajax/query-attachments", json={"query": {"paged": "abc", "post_parent": "x"}})
        assert [item["id"] for item in listed.json()] == [image["id"]]

    def test_query_attachments_database_failure_returns_503(self, media_app, client):
        media_app.repository.find_ids = MagicMock(side_effect=RepositoryError("database locked"))

        response = client.post("/ajax/query-attachments", json={"query": {"s": "anything"}})

        assert response.status_code == 503
        media_app.repository.find_ids.assert_called_once()

    def test_get_attachment_database_failure_returns_503(self, media_app, client):
        media_app.repository.find_by_id = MagicMock(side_effect=RepositoryError("database locked"))

        assert client.get("/attachments/1").status_code == 503

    def test_query_attachments_without_body_query(self, client):
        response = client.post("/ajax/query-attachments", json={})

        assert response.status_code == 200
        assert response.json() == []

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "Ok"
        assert "hits" in data["object_cache"]

    def test_plugins(self, client):
        response = client.get("/plugins")

        assert response.status_code == 200
        assert {"name": "attachment_query_cache", "status": "loaded"} in response.json()
